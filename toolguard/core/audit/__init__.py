"""
Audit Layer — Decision logging.

Classes:
- SecurityLogger: Tamper-evident logging with chain hashing
"""

from toolguard.core.audit.logger import SecurityLogger

__all__ = ['SecurityLogger']
