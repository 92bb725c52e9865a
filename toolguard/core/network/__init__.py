"""
Network Security — Outbound URL screening.

Classes:
- URLValidator: Scheme allowlist and loopback-host rejection
"""

from toolguard.core.network.url_validator import URLValidator, parse_url

__all__ = ['URLValidator', 'parse_url']
