"""
ToolGuard — Access-control policy engine for tool-exposing processes

Gates the three dangerous things a tool handler does:

- core/  : Policy store, path/command/URL guards, audit logging, config
- proxy/ : Guarded executor that validates before reading, running or fetching

Version: 1.2.0
"""

__version__ = "1.2.0"
