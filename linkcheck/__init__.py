"""Static site link checker."""

__version__ = "0.1.0"
