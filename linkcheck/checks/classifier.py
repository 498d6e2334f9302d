"""Classify anchor hrefs as internal, external or bogus-scheme links."""

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import SplitResult, unquote, urlsplit

EXTERNAL_SCHEMES = ("http", "https")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class URLParseError(Exception):
    """Raised when an href is not a well-formed URL."""


class LinkKind(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    BOGUS_SCHEME = "bogus_scheme"


@dataclass(frozen=True)
class Link:
    """A classified href.

    Attributes:
        kind: Which bucket the href belongs to
        target: Namespace lookup key for internal links, absolute URL for
            external links, and the raw href for bogus schemes
    """

    kind: LinkKind
    target: str


def _split_scheme_less(href: str) -> SplitResult:
    """Split an href that cannot carry a scheme or host, keeping it verbatim."""
    rest, _, fragment = href.partition("#")
    path, _, query = rest.partition("?")
    return SplitResult("", "", path, query, fragment)


def parse_url(href: str) -> SplitResult:
    """Split an href into its components, rejecting malformed input.

    Raises:
        URLParseError: On control characters, invalid percent escapes,
            invalid ports, or anything urlsplit refuses
    """
    if _CONTROL_CHARS.search(href):
        raise URLParseError("invalid control character in URL")

    try:
        if href[:1] == " ":
            # urlsplit would strip the space and find a scheme or host
            parts = _split_scheme_less(href)
        else:
            parts = urlsplit(href)
        if parts.netloc:
            # Raises ValueError for non-numeric or out of range ports
            parts.port
    except ValueError as e:
        raise URLParseError(str(e)) from e

    for component in (parts.netloc, parts.path, parts.fragment):
        match = _BAD_ESCAPE.search(component)
        if match:
            bad = component[match.start():match.start() + 3]
            raise URLParseError(f"invalid URL escape {bad!r}")

    if not parts.scheme and not parts.netloc:
        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            raise URLParseError("first path segment in URL cannot contain colon")

    return parts


def classify_href(href: str) -> Link:
    """Bucket an href by scheme and host.

    Rules, applied in order:
        1. No scheme and no host: internal, keyed by the decoded path.
        2. Scheme other than http/https: bogus scheme.
        3. Host without scheme (``//host/x``): external over https.
        4. Anything else: external, used as written.

    Raises:
        URLParseError: If the href cannot be parsed
    """
    parts = parse_url(href)

    if not parts.scheme and not parts.netloc:
        return Link(LinkKind.INTERNAL, unquote(parts.path))

    if parts.scheme and parts.scheme not in EXTERNAL_SCHEMES:
        return Link(LinkKind.BOGUS_SCHEME, href)

    if not parts.scheme:
        return Link(LinkKind.EXTERNAL, "https:" + href)

    return Link(LinkKind.EXTERNAL, href)
