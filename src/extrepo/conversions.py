"""Fallible conversions for network-sourced sub-fields.

Each function returns ``None`` (or an empty tuple) for input it cannot
convert, so callers decide what an absent value means for their field.
"""

from __future__ import annotations

import io
import logging
import re
from urllib.parse import urlsplit

from extrepo.internal_config import KNOWN_URL_PROTOCOLS
from extrepo.models import ExtensionRepositoryDescriptor, ExtensionScmConnection
from extrepo.record import RawRecord, as_str

logger: logging.Logger = logging.getLogger(__name__)

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
# unreserved, reserved and the percent sign (RFC 3986)
_URI_CHARACTERS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*")
_BROKEN_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def to_url(value: object) -> str | None:
    """Return *value* if it is an absolute URL with a known protocol."""
    text = as_str(value)
    if not text:
        return None
    scheme, sep, rest = text.partition(":")
    if not sep or scheme.lower() not in KNOWN_URL_PROTOCOLS:
        return None
    if any(char.isspace() for char in rest):
        return None
    try:
        urlsplit(text)
    except ValueError:
        return None
    return text


def to_uri(value: object) -> str | None:
    """Return *value* if it is a well-formed URI reference."""
    text = as_str(value)
    if not text:
        return None
    if not _URI_CHARACTERS.fullmatch(text) or _BROKEN_ESCAPE.search(text):
        return None
    head, sep, _ = text.partition(":")
    # a colon before any slash, query or fragment delimits the scheme
    if sep and not any(delimiter in head for delimiter in "/?#"):
        if not _SCHEME.fullmatch(head):
            return None
    try:
        parts = urlsplit(text)
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return None
    return text


def to_lines(content: object) -> tuple[str, ...]:
    """Split *content* into lines, ``()`` if absent or unreadable."""
    text = as_str(content)
    if text is None:
        return ()
    try:
        with io.StringIO(text, newline=None) as reader:
            return tuple(line.rstrip("\n") for line in reader)
    except (OSError, ValueError) as e:
        logger.debug(f"Could not read license content: {e}")
        return ()


def to_scm_connection(block: RawRecord | None) -> ExtensionScmConnection | None:
    if block is None:
        return None
    return ExtensionScmConnection(
        system=as_str(block.get("system")),
        path=as_str(block.get("path")),
    )


def to_repository_descriptor(
    block: RawRecord,
) -> ExtensionRepositoryDescriptor | None:
    uri = to_uri(block.get("uri"))
    if uri is None:
        logger.debug(
            f"Skipping repository {block.get('id')!r}: invalid uri {block.get('uri')!r}"
        )
        return None
    return ExtensionRepositoryDescriptor(
        id=as_str(block.get("id")),
        type=as_str(block.get("type")),
        uri=uri,
    )
