#!/usr/bin/env python3
"""Link checker for generated static HTML sites.

Scans a site directory for HTML files, derives the set of valid site URIs
from their paths and reports broken internal links (errors) and unreachable
external links (warnings). Exits non-zero if any error was found.

Usage:
    linkcheck [--root ROOT] [--html PATTERN] [--index NAME] [--debug]
              [--timeout SECONDS] [--report FILE] [--log-file FILE]
"""

import argparse
import glob
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from linkcheck.checks.checker import LinkChecker
from linkcheck.checks.external import ExternalLinkChecker
from linkcheck.checks.namespace import build_uri_namespace
from linkcheck.checks.report import IssueReporter
from linkcheck.config import CheckerConfig, validate_config

logger = logging.getLogger(__name__)


class FileDiscoveryError(Exception):
    """Raised when the HTML files of a site cannot be listed."""


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Set up logging configuration.

    Args:
        debug: Enable debug logging
        log_file: Optional file that receives a copy of the log
    """
    level = logging.DEBUG if debug else logging.INFO
    format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=format_string, handlers=handlers)


def discover_files(root: str, pattern: str) -> List[str]:
    """Find HTML files under root matching a glob pattern.

    Args:
        root: Cleaned site root directory
        pattern: Glob pattern relative to root, ``**`` matches any depth

    Returns:
        Sorted file paths, each prefixed by root

    Raises:
        FileDiscoveryError: If root is not a directory or the pattern
            escapes root
    """
    if not os.path.isdir(root):
        raise FileDiscoveryError(f"root {root!r} is not a directory")

    try:
        matches = glob.glob(pattern, root_dir=root, recursive=True)
    except OSError as e:
        raise FileDiscoveryError(str(e)) from e

    files = []
    for match in matches:
        relative = os.path.normpath(match)
        escapes = relative == os.pardir or relative.startswith(os.pardir + os.sep)
        if escapes or os.path.isabs(relative):
            raise FileDiscoveryError(f"pattern {pattern!r} matched {match!r} outside root")
        path = os.path.join(root, match)
        if os.path.isfile(path):
            files.append(path)

    return sorted(files)


def run(config: CheckerConfig) -> int:
    """Check every HTML file of a site.

    Args:
        config: Run configuration

    Returns:
        Exit code (0 if no errors were found, 1 otherwise)
    """
    logger.debug(f"using pattern {config.html_pattern!r}")
    root = config.clean_root
    logger.debug(f"root {root!r}")

    files = discover_files(root, config.html_pattern)

    uris = build_uri_namespace(root, files, config.index)
    logger.info(f"Found {len(uris)} uris")

    reporter = IssueReporter()
    external = ExternalLinkChecker(timeout=config.timeout)
    checker = LinkChecker(external=external)
    try:
        for path in files:
            for issue in checker.check_file(path, uris):
                reporter.emit(issue)
    finally:
        external.close()

    if config.report_path:
        reporter.write_report(Path(config.report_path))

    if reporter.failed:
        logger.error(f"linkcheck failed with {reporter.errors} errors")
        return 1

    if reporter.warnings:
        logger.info(f"linkcheck: ok ({reporter.warnings} warnings)")
    else:
        logger.info("linkcheck: ok")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Check internal and external links of a static HTML site",
        epilog="Example: linkcheck --root ./public --html '**/*.html'",
    )
    parser.add_argument(
        "--root",
        help="root directory containing static html site (default: ./public)",
    )
    parser.add_argument(
        "--html",
        dest="html_pattern",
        help="pattern for finding HTML files (default: **/*.html)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="enable debug logging",
    )
    parser.add_argument(
        "--index",
        help="name of index.html file (default: index.html)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="seconds to wait for external links to respond (default: 10)",
    )
    parser.add_argument(
        "--report",
        dest="report_path",
        help="write issues as JSON to this file",
    )
    parser.add_argument(
        "--log-file",
        help="also write log output to this file",
    )
    return parser


def build_config(args: argparse.Namespace) -> CheckerConfig:
    """Combine environment defaults with command line overrides."""
    config = CheckerConfig.from_env()
    overrides = {
        name: getattr(args, name)
        for name in ("root", "html_pattern", "debug", "index", "timeout", "report_path")
        if getattr(args, name) is not None
    }
    return replace(config, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the link checker.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    # Try to load .env file, silently skip if not found
    load_dotenv()

    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        setup_logging(log_file=args.log_file)
        logger.error(str(e))
        return 1

    setup_logging(debug=config.debug, log_file=args.log_file)

    errors = validate_config(config)
    if errors:
        logger.error("Configuration errors found:")
        for error in errors:
            logger.error(f"  - {error}")
        return 1

    try:
        return run(config)
    except FileDiscoveryError as e:
        logger.error(f"FAIL: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
