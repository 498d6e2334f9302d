"""Link extraction, classification and validation."""
