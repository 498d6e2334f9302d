"""Per-file link validation.

LinkChecker ties together anchor extraction, href classification and link
validation for a single HTML page. Internal links are looked up in the site
URI namespace; external links are delegated to an ExternalLinkChecker that
remembers results across files.
"""

import logging
from pathlib import Path
from typing import AbstractSet, List, Optional

from linkcheck.checks.classifier import LinkKind, URLParseError, classify_href
from linkcheck.checks.external import ExternalLinkChecker
from linkcheck.checks.extractor import HTMLParseError, extract_anchors, parse_html
from linkcheck.checks.issues import Issue, issue_error, quote

logger = logging.getLogger(__name__)


class LinkChecker:
    """Validates the anchors of HTML pages against a site namespace."""

    def __init__(self, external: Optional[ExternalLinkChecker] = None) -> None:
        self.external = external if external is not None else ExternalLinkChecker()

    def check_file(self, path: str, uris: AbstractSet[str]) -> List[Issue]:
        """Read and check a single HTML file.

        Args:
            path: File to check, used as the path on every issue
            uris: Site URI namespace

        Returns:
            Issues found in the file, each tagged with path
        """
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            return [issue_error(f"unable to read: {e}").with_path(path)]

        logger.debug(f"Checking file {path}")
        return [issue.with_path(path) for issue in self.check_html(raw, uris)]

    def check_html(self, raw: bytes, uris: AbstractSet[str]) -> List[Issue]:
        """Check every anchor in an HTML buffer.

        Args:
            raw: Page contents
            uris: Site URI namespace

        Returns:
            Issues in document order, without a path
        """
        try:
            doc = parse_html(raw)
        except HTMLParseError as e:
            return [issue_error(f"unable to parse HTML: {e}")]

        issues = []
        for anchor in extract_anchors(doc):
            issue = self.check_href(anchor.href, uris)
            if issue is not None:
                issues.append(issue.with_position(anchor.line, anchor.col))
        return issues

    def check_href(self, href: str, uris: AbstractSet[str]) -> Optional[Issue]:
        """Classify and validate one href.

        Returns:
            The issue for this href, or None if it is valid or was
            already checked
        """
        try:
            link = classify_href(href)
        except URLParseError as e:
            return issue_error(f"unable to parse url {quote(href)}, {e}")

        if link.kind is LinkKind.INTERNAL:
            if link.target not in uris:
                return issue_error(f"didn't find relative link: {quote(link.target)}")
            return None

        if link.kind is LinkKind.BOGUS_SCHEME:
            return issue_error(f"found bogus scheme {quote(href)}")

        return self.external.check(link.target)
