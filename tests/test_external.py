"""Tests for external link checking."""

from unittest.mock import Mock, patch

import pytest
import requests
from urllib3.exceptions import LocationParseError

from linkcheck.checks.external import ExternalLinkCache, ExternalLinkChecker
from linkcheck.checks.issues import Severity


def make_response(status_code: int = 200, reason: str = "OK") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    return response


@pytest.fixture
def session() -> Mock:
    mock_session = Mock(spec=requests.Session)
    mock_session.get.return_value = make_response()
    return mock_session


class TestExternalLinkCache:
    """Test ExternalLinkCache class."""

    def test_starts_empty(self) -> None:
        cache = ExternalLinkCache()

        assert len(cache) == 0
        assert "https://example.com/" not in cache
        assert cache.get("https://example.com/") is None

    def test_put_and_get(self) -> None:
        cache = ExternalLinkCache()
        cache.put("https://example.com/", True)
        cache.put("https://example.org/", False)

        assert cache.get("https://example.com/") is True
        assert cache.get("https://example.org/") is False
        assert len(cache) == 2

    def test_first_result_wins(self) -> None:
        """A later put does not overwrite an earlier result."""
        cache = ExternalLinkCache()
        cache.put("https://example.com/", False)
        cache.put("https://example.com/", True)

        assert cache.get("https://example.com/") is False


class TestExternalLinkChecker:
    """Test ExternalLinkChecker class."""

    def test_success_returns_no_issue(self, session: Mock) -> None:
        """A 200 response is cached as good."""
        checker = ExternalLinkChecker(timeout=10, session=session)

        assert checker.check("https://example.com/") is None
        assert checker.cache.get("https://example.com/") is True
        session.get.assert_called_once_with(
            "https://example.com/", timeout=10, stream=True
        )
        session.get.return_value.close.assert_called_once()

    def test_non_200_status_is_warning(self, session: Mock) -> None:
        """Any status other than 200 is reported as a warning."""
        session.get.return_value = make_response(404, "Not Found")
        checker = ExternalLinkChecker(session=session)

        issue = checker.check("https://example.com/gone")

        assert issue is not None
        assert issue.severity is Severity.WARNING
        assert issue.message == (
            'external link "https://example.com/gone" returned status 404 Not Found'
        )
        assert checker.cache.get("https://example.com/gone") is False

    def test_redirect_status_is_not_success(self, session: Mock) -> None:
        """Only exactly 200 counts as success."""
        session.get.return_value = make_response(204, "No Content")
        checker = ExternalLinkChecker(session=session)

        issue = checker.check("https://example.com/empty")

        assert issue is not None
        assert "returned status 204" in issue.message

    def test_network_error_is_warning(self, session: Mock) -> None:
        """Transport errors are reported as warnings and cached as failed."""
        session.get.side_effect = requests.ConnectionError("name resolution failed")
        checker = ExternalLinkChecker(session=session)

        issue = checker.check("https://example.invalid/x")

        assert issue is not None
        assert issue.severity is Severity.WARNING
        assert issue.message.startswith('external link "https://example.invalid/x" failed:')
        assert "name resolution failed" in issue.message
        assert checker.cache.get("https://example.invalid/x") is False

    def test_malformed_host_is_warning(self, session: Mock) -> None:
        """Hosts urllib3 cannot parse are reported instead of raised."""
        session.get.side_effect = LocationParseError("a..b")
        checker = ExternalLinkChecker(session=session)

        issue = checker.check("http://a..b/")

        assert issue is not None
        assert issue.severity is Severity.WARNING
        assert issue.message.startswith('external link "http://a..b/" failed:')
        assert checker.cache.get("http://a..b/") is False

    def test_timeout_is_warning(self, session: Mock) -> None:
        session.get.side_effect = requests.Timeout("read timed out")
        checker = ExternalLinkChecker(timeout=0.5, session=session)

        issue = checker.check("https://slow.example.com/")

        assert issue is not None
        assert issue.severity is Severity.WARNING
        session.get.assert_called_once_with(
            "https://slow.example.com/", timeout=0.5, stream=True
        )

    def test_same_url_checked_once(self, session: Mock) -> None:
        """A repeated URL is skipped without a new request or issue."""
        session.get.return_value = make_response(500, "Internal Server Error")
        checker = ExternalLinkChecker(session=session)

        first = checker.check("https://example.com/broken")
        second = checker.check("https://example.com/broken")

        assert first is not None
        assert second is None
        assert session.get.call_count == 1

    def test_distinct_urls_checked_separately(self, session: Mock) -> None:
        checker = ExternalLinkChecker(session=session)

        checker.check("https://example.com/a")
        checker.check("https://example.com/b")

        assert session.get.call_count == 2
        assert len(checker.cache) == 2

    def test_shared_cache(self, session: Mock) -> None:
        """Results already in a supplied cache are honoured."""
        cache = ExternalLinkCache()
        cache.put("https://example.com/", False)
        checker = ExternalLinkChecker(session=session, cache=cache)

        assert checker.check("https://example.com/") is None
        session.get.assert_not_called()

    def test_session_created_lazily(self) -> None:
        """A requests session is only created when a URL is checked."""
        with patch("linkcheck.checks.external.requests.Session") as mock_session_cls:
            mock_session_cls.return_value.get.return_value = make_response()
            checker = ExternalLinkChecker()

            mock_session_cls.assert_not_called()

            checker.check("https://example.com/")
            checker.close()

            mock_session_cls.assert_called_once()
            mock_session_cls.return_value.close.assert_called_once()
