"""Configuration settings for the static site link checker.

Defaults can be overridden through environment variables (optionally loaded
from a .env file) and then by command line flags. The resulting
CheckerConfig is immutable and shared by every component of a run.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# Defaults
DEFAULT_ROOT = "./public"
DEFAULT_HTML_PATTERN = "**/*.html"
DEFAULT_INDEX = "index.html"
DEFAULT_TIMEOUT = 10.0  # seconds to wait for an external response

# Tag recorded on every issue this tool produces
LINTER_NAME = "linkcheck"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CheckerConfig:
    """Settings for a single link check run."""

    root: str = DEFAULT_ROOT
    html_pattern: str = DEFAULT_HTML_PATTERN
    debug: bool = False
    index: str = DEFAULT_INDEX
    timeout: float = DEFAULT_TIMEOUT
    report_path: Optional[str] = None

    @property
    def clean_root(self) -> str:
        """Root directory with redundant separators and dots removed."""
        return os.path.normpath(self.root)

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Build a configuration from LINKCHECK_* environment variables.

        Returns:
            CheckerConfig with environment overrides applied

        Raises:
            ValueError: If LINKCHECK_TIMEOUT is not a number
        """
        timeout_raw = os.getenv("LINKCHECK_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"LINKCHECK_TIMEOUT must be a number, got {timeout_raw!r}")

        return cls(
            root=os.getenv("LINKCHECK_ROOT", DEFAULT_ROOT),
            html_pattern=os.getenv("LINKCHECK_HTML", DEFAULT_HTML_PATTERN),
            debug=_env_flag("LINKCHECK_DEBUG"),
            index=os.getenv("LINKCHECK_INDEX", DEFAULT_INDEX),
            timeout=timeout,
            report_path=os.getenv("LINKCHECK_REPORT") or None,
        )


def validate_config(config: CheckerConfig) -> List[str]:
    """Validate configuration settings.

    Args:
        config: Configuration object to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not config.html_pattern:
        errors.append("must specify html pattern")

    if config.timeout <= 0:
        errors.append(f"timeout must be positive, got {config.timeout}")

    root_path = Path(config.clean_root)
    if not root_path.exists():
        errors.append(f"Root directory does not exist: {config.root}")
    elif not root_path.is_dir():
        errors.append(f"Root path is not a directory: {config.root}")

    return errors
