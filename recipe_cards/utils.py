"""Utility helpers for link normalization and remote path handling."""

from __future__ import annotations

import posixpath
import re
from datetime import datetime
from typing import List
from urllib.parse import unquote, urlsplit, urlunsplit

from .errors import InvalidLinkError
from .models import RecipeImage

BAD_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")
# urlsplit silently drops tabs and newlines instead of rejecting them.
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x1f\x7f]")


def normalize_link(link: str) -> RecipeImage:
    """Force an HTTPS scheme on *link* and derive the image filename.

    Links on the source page are scheme-relative (``//images.ctfassets.net/...``).
    """
    link = link.strip()
    if CONTROL_CHAR_PATTERN.search(link):
        raise InvalidLinkError(f"invalid control character in {link!r}")
    if BAD_ESCAPE_PATTERN.search(link):
        raise InvalidLinkError(f"invalid URL escape in {link!r}")
    try:
        parts = urlsplit(link)
        # Accessing the port validates the netloc.
        parts.port
    except ValueError as exc:
        raise InvalidLinkError(f"cannot parse {link!r}: {exc}") from exc

    if not parts.netloc:
        raise InvalidLinkError(f"no host in {link!r}")

    filename = posixpath.basename(unquote(parts.path).rstrip("/"))
    if not filename or filename in (".", ".."):
        raise InvalidLinkError(f"no filename in {link!r}")

    url = urlunsplit(parts._replace(scheme="https"))
    return RecipeImage(source_link=link, url=url, filename=filename)


def dated_folder(base_folder: str, folder_format: str, now: datetime) -> str:
    """Return ``{base_folder}/{now formatted with folder_format}``.

    The formatted date always lands below *base_folder*, even when it starts
    with a slash.
    """
    formatted = now.strftime(folder_format).lstrip("/")
    return posixpath.normpath(posixpath.join(base_folder, formatted))


def split_remote_path(path: str) -> List[str]:
    """Return each cumulative prefix of a remote path, shortest first."""
    segments = [segment for segment in path.split("/") if segment]
    prefix = "/" if path.startswith("/") else ""
    prefixes = []
    for segment in segments:
        prefix = posixpath.join(prefix, segment) if prefix else segment
        prefixes.append(prefix)
    return prefixes
