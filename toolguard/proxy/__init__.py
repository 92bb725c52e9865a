"""
ToolGuard Proxy — Tool-handler side enforcement

Classes:
- GuardedExecutor: Validated file reads/writes, command runs and URL fetches
"""

from toolguard.proxy.executor import GuardedExecutor

__all__ = ['GuardedExecutor']
