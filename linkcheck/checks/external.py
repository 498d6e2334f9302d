"""HTTP verification of external links.

Each unique URL is requested at most once per run. The first result is
memoized in an ExternalLinkCache and later anchors pointing at the same URL
are skipped without a new request or a new issue.

Example:
    >>> checker = ExternalLinkChecker(timeout=10)
    >>> issue = checker.check("https://example.com/")
"""

import logging
from typing import Dict, Optional

import requests

from linkcheck.checks.issues import Issue, issue_warning, quote
from linkcheck.config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class ExternalLinkCache:
    """Per-run memo of external URL results. First write wins."""

    def __init__(self) -> None:
        self._results: Dict[str, bool] = {}

    def get(self, url: str) -> Optional[bool]:
        return self._results.get(url)

    def put(self, url: str, ok: bool) -> None:
        self._results.setdefault(url, ok)

    def __contains__(self, url: object) -> bool:
        return url in self._results

    def __len__(self) -> int:
        return len(self._results)


class ExternalLinkChecker:
    """Checks external URLs with a single GET each.

    Attributes:
        timeout: Seconds to wait for the server to respond
        cache: Results of URLs already checked this run
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        cache: Optional[ExternalLinkCache] = None,
    ) -> None:
        self.timeout = timeout
        self.cache = cache if cache is not None else ExternalLinkCache()
        self._session = session

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session.

        Lazy initialization - only creates a session when a URL is checked.
        """
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def check(self, url: str) -> Optional[Issue]:
        """Verify that an external URL answers with 200.

        Args:
            url: Absolute http or https URL

        Returns:
            A warning issue if the request failed or returned another
            status, None if it succeeded or was already checked
        """
        if url in self.cache:
            logger.debug(f"Skipping already checked {url}")
            return None

        logger.info(f"Checking {url}")
        try:
            response = self._get_session().get(url, timeout=self.timeout, stream=True)
        except (requests.RequestException, ValueError) as e:
            # urllib3 LocationParseError and IDNA failures are ValueErrors
            self.cache.put(url, False)
            return issue_warning(f"external link {quote(url)} failed: {e}")

        try:
            status = response.status_code
            reason = response.reason
        finally:
            response.close()

        if status != 200:
            self.cache.put(url, False)
            status_text = f"{status} {reason}" if reason else str(status)
            return issue_warning(
                f"external link {quote(url)} returned status {status_text}"
            )

        self.cache.put(url, True)
        return None

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
