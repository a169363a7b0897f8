"""URL normalization and URL-derived metadata.

All helpers here are total: malformed input resolves to a documented fallback instead of
raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

UNKNOWN_DOMAIN = "unknown source"

_TRAILING_PUNCTUATION_RE = re.compile(r"[),.;:!?]+\Z")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SINGLE_DOT = {".", "%2e"}
_DOUBLE_DOT = {"..", ".%2e", "%2e.", "%2e%2e"}


@dataclass(frozen=True)
class ParsedUrl:
    """The parts of a successfully parsed absolute URL.

    ``path`` is still percent-encoded, with dot segments resolved.
    """

    scheme: str
    hostname: str
    path: str


def _backslashes_to_slashes(raw: str) -> str:
    # http(s) URLs treat "\" like "/" before the query or fragment
    cut = len(raw)
    for sep in ("?", "#"):
        idx = raw.find(sep)
        if idx != -1:
            cut = min(cut, idx)
    return raw[:cut].replace("\\", "/") + raw[cut:]


def _resolve_dot_segments(path: str) -> str:
    out: list[str] = []
    segments = path.split("/")
    for i, seg in enumerate(segments):
        last = i == len(segments) - 1
        lowered = seg.lower()
        if lowered in _DOUBLE_DOT:
            if len(out) > 1:
                out.pop()
            if last:
                out.append("")
        elif lowered in _SINGLE_DOT:
            if last:
                out.append("")
        else:
            out.append(seg)
    return "/".join(out)


def _ascii_host(hostname: str) -> str | None:
    if hostname.isascii():
        return hostname
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return None


def parse_url(raw: str) -> ParsedUrl | None:
    """Parse an absolute URL.

    Returns ``None`` when the string is rejected by the parser, lacks a scheme or host,
    carries an invalid port, or has a host that cannot be IDNA-encoded. The path is not
    decoded here.
    """

    try:
        parts = urlsplit(_backslashes_to_slashes(raw))
        # Accessing .port validates it
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    hostname = _ascii_host(parts.hostname)
    if hostname is None:
        return None
    return ParsedUrl(scheme=parts.scheme, hostname=hostname, path=_resolve_dot_segments(parts.path))


def decode_path(path: str) -> str | None:
    """Percent-decode a URL path as UTF-8.

    Returns ``None`` for a stray ``%`` or escapes that are not valid UTF-8.
    """

    if _BAD_PERCENT_RE.search(path):
        return None
    try:
        return unquote(path, errors="strict")
    except UnicodeDecodeError:
        return None


def normalize_url(raw: str) -> str:
    """Canonicalize a matched URL into the deduplication key.

    Trims whitespace, strips a trailing run of ``),.;:!?`` and unwraps ``<...>``.
    Returns an empty string when nothing is left.
    """

    url = _TRAILING_PUNCTUATION_RE.sub("", raw.strip())
    if len(url) >= 2 and url.startswith("<") and url.endswith(">"):
        url = url[1:-1]
    return url


def domain_of(url: str) -> str:
    """Return the host of ``url`` without a leading ``www.``, or ``"unknown source"``."""

    parsed = parse_url(url)
    if parsed is None:
        return UNKNOWN_DOMAIN
    return parsed.hostname.removeprefix("www.")


def default_label_of(url: str) -> str:
    """Derive a display label from ``url``.

    The last non-empty decoded path segment, else the hostname. Input that does not parse,
    or whose path does not decode, is returned as is.
    """

    parsed = parse_url(url)
    if parsed is None:
        return url
    path = decode_path(parsed.path)
    if path is None:
        return url
    segments = [s for s in path.split("/") if s]
    return segments[-1] if segments else parsed.hostname
