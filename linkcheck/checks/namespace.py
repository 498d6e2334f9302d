"""Build the set of site URIs served by a directory of HTML files.

A file's URI is its path relative to the site root. When the path ends with
the configured index filename, that suffix is dropped so that
``/docs/index.html`` is served as ``/docs/``.

Example:
    >>> uris = build_uri_namespace("/site", ["/site/index.html", "/site/about/index.html"])
    >>> sorted(uris)
    ['/', '/about/']
"""

import logging
import os
from typing import FrozenSet, Iterable

logger = logging.getLogger(__name__)


def file_to_uri(root: str, path: str, index: str = "index.html") -> str:
    """Convert a discovered file path into its canonical site URI.

    Args:
        root: Cleaned site root directory
        path: File path, which must start with root
        index: Filename stripped from the end of the URI (empty to disable)

    Returns:
        Site-relative URI beginning with "/"

    Raises:
        ValueError: If path is not under root
    """
    if not path.startswith(root):
        raise ValueError(f"File {path!r} is not under root {root!r}")

    uri = path[len(root):]
    if os.sep != "/":
        uri = uri.replace(os.sep, "/")

    if index and uri.endswith(index):
        uri = uri[: len(uri) - len(index)]

    return uri


def build_uri_namespace(
    root: str, files: Iterable[str], index: str = "index.html"
) -> FrozenSet[str]:
    """Compute the set of URIs for all discovered files.

    No case, slash or percent-encoding normalization is applied. Files that
    map to the same URI collapse into a single entry.

    Args:
        root: Cleaned site root directory
        files: File paths found under root
        index: Filename stripped from the end of URIs (empty to disable)

    Returns:
        Immutable set of site-relative URIs
    """
    uris = frozenset(file_to_uri(root, path, index) for path in files)
    logger.debug(f"Built namespace of {len(uris)} uris from root {root!r}")
    return uris
