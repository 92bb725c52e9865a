#!/usr/bin/env python3
"""
ToolGuard Core Network — URL Validator
========================================
Syntactic SSRF screening for outbound fetches:
- Strict parse (control characters, malformed authority, non-numeric port)
- http/https only
- Host required
- Loopback rejection by substring: 'localhost', '127.0.0.1', '::1'

The loopback check is deliberately coarse. It over-blocks any host that
merely contains 'localhost' (app.localhost.example.com) and misses
0.0.0.0 and decimal/octal spellings of 127.0.0.1. No DNS lookups are made;
private ranges are accepted.

Import from: toolguard.core.network.url_validator
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from toolguard.core.types import ActionType, Decision, SecurityError, ValidationError
from toolguard.core.constants import ALLOWED_URL_SCHEMES, LOOPBACK_HOST_MARKERS

_SCHEME_RE = re.compile(r'^([A-Za-z][A-Za-z0-9+.\-]*):')
_CONTROL_RE = re.compile(r'[\x00-\x1f\x7f]')
# ASCII characters that can never appear in a host, escaped or not
_HOST_ILLEGAL_RE = re.compile(r'[\s{}|\\^`]')
_BAD_ESCAPE_RE = re.compile(r'%(?![0-9A-Fa-f]{2})')


@dataclass(frozen=True)
class ParsedURL:
    scheme: str
    host: str       # authority without userinfo, port included
    hostname: str   # host without port or brackets, lower-cased
    port: Optional[int] = None


def parse_url(url: str) -> ParsedURL:
    """Parse a URL, raising ValidationError("invalid URL format") on bad syntax.

    A string without a recognizable scheme still parses (scheme == '') so
    callers can reject it on scheme grounds.
    """
    if _CONTROL_RE.search(url):
        raise _format_error("invalid control character in URL")
    if url.startswith(':'):
        raise _format_error("missing protocol scheme")

    match = _SCHEME_RE.match(url)
    if not match:
        first_segment = url.split('/', 1)[0]
        if ':' in first_segment.split('?', 1)[0].split('#', 1)[0]:
            raise _format_error("first path segment in URL cannot contain colon")
        return ParsedURL(scheme='', host='', hostname='')

    scheme = match.group(1).lower()
    rest = url[match.end():]
    if not rest.startswith('//'):
        # Opaque form (mailto:, javascript:alert(1), http:example.com)
        return ParsedURL(scheme=scheme, host='', hostname='')

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise _format_error(str(e)) from e

    userinfo, _, host = parts.netloc.rpartition('@')
    for label, value in (('userinfo', userinfo), ('host', host)):
        bad = _HOST_ILLEGAL_RE.search(value)
        if bad:
            raise _format_error(f"invalid character {bad.group()!r} in {label}")
        if _BAD_ESCAPE_RE.search(value):
            raise _format_error(f"invalid URL escape in {label}")

    return ParsedURL(
        scheme=scheme,
        host=host,
        hostname=(parts.hostname or ''),
        port=_parse_port(host),
    )


def _parse_port(host: str) -> Optional[int]:
    """Port after the host: digits only, any magnitude, may be empty."""
    if host.startswith('['):
        tail = host[host.find(']') + 1:]
        if tail and not tail.startswith(':'):
            raise _format_error(f"invalid port {tail!r} after host")
        port = tail[1:]
    else:
        _, sep, port = host.rpartition(':')
        if not sep:
            return None
    if not port:
        return None
    if not port.isdigit() or not port.isascii():
        raise _format_error(f"invalid port ':{port}' after host")
    return int(port)


class URLValidator:
    def __init__(self, logger=None):
        self.logger = logger

    def validate(self, url: str) -> str:
        """Validate a URL for fetching. Returns the host or raises."""
        try:
            host = self._check(url)
        except (ValidationError, SecurityError) as e:
            self._record(Decision.from_error(ActionType.URL_FETCH, url, e))
            raise
        self._record(Decision(ActionType.URL_FETCH, url, True, normalized=host))
        return host

    def _check(self, url: str) -> str:
        if not url:
            raise ValidationError("URL cannot be empty")

        parsed = parse_url(url)

        if parsed.scheme not in ALLOWED_URL_SCHEMES:
            raise SecurityError(
                "invalid URL scheme",
                "only HTTP and HTTPS are allowed",
            )

        if not parsed.host:
            raise ValidationError("URL must have a host")

        if any(marker in parsed.host for marker in LOOPBACK_HOST_MARKERS):
            raise SecurityError(
                "localhost access denied",
                "access to local services is not allowed",
            )

        return parsed.host

    def _record(self, decision: Decision) -> None:
        if self.logger is not None:
            self.logger.log_decision(decision)


def _format_error(details: str) -> ValidationError:
    return ValidationError("invalid URL format", details)


__all__ = ['URLValidator', 'ParsedURL', 'parse_url']
