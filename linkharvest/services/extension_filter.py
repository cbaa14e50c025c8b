import logging
from typing import Iterable, List, Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def parse_extension_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated extension list exactly as given.

    Entries are not trimmed, so `".jpg, .png"` yields `[".jpg", " .png"]`.
    An empty or missing value yields no extensions at all.
    """
    if not raw:
        return []
    return raw.split(",")


def path_extension(url: str) -> str:
    """Return the extension of the last path segment, dot included, or ''."""
    path = urlsplit(url).path
    segment = path.rsplit("/", 1)[-1]
    idx = segment.rfind(".")
    if idx < 0:
        return ""
    return segment[idx:]


def filter_links(links: Iterable[str], extensions: Iterable[str]) -> List[str]:
    """Keep the links whose path extension matches one of `extensions`.

    Matching is case-insensitive and the input order is preserved. An empty
    `extensions` list matches nothing.
    """
    allowed = {ext.casefold() for ext in extensions}
    if not allowed:
        return []

    filtered = []
    for link in links:
        try:
            ext = path_extension(link)
        except ValueError:
            logger.debug("Skipping unparseable link %r", link)
            continue
        if ext.casefold() in allowed:
            filtered.append(link)
    return filtered
