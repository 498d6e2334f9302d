"""Anchor extraction from generated HTML pages.

Parsing uses BeautifulSoup with the standard library html.parser builder,
which tolerates malformed markup. Only undecodable byte sequences make a
page unparseable.
"""

import logging
from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup, ParserRejectedMarkup

logger = logging.getLogger(__name__)

ANCHOR_SELECTOR = "a[href]"


class HTMLParseError(Exception):
    """Raised when a page cannot be turned into a document tree."""


@dataclass(frozen=True)
class Anchor:
    """An anchor element's href and its position in the source."""

    href: str
    line: int = 0
    col: int = 0


def parse_html(raw: bytes) -> BeautifulSoup:
    """Parse raw page bytes into a document tree.

    Args:
        raw: File contents, expected to be UTF-8

    Returns:
        Parsed document

    Raises:
        HTMLParseError: If the bytes are not valid UTF-8 or the parser
            rejects the markup outright
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTMLParseError(str(e)) from e

    try:
        return BeautifulSoup(text, "html.parser")
    except ParserRejectedMarkup as e:
        raise HTMLParseError(str(e)) from e


def extract_anchors(doc: BeautifulSoup) -> List[Anchor]:
    """Return every anchor with an href, in document order.

    The href value is returned verbatim, without decoding or trimming.
    """
    anchors = []
    for node in doc.select(ANCHOR_SELECTOR):
        href = node.get("href")
        if not href:
            # selector guarantees the attribute, but it may be empty
            continue
        line = node.sourceline or 0
        col = node.sourcepos + 1 if node.sourcepos is not None else 0
        anchors.append(Anchor(href=href, line=line, col=col))

    logger.debug(f"Extracted {len(anchors)} anchors")
    return anchors
