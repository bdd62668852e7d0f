"""External adapters for the Roster employee proxy.

This package contains all external dependencies (httpx, HTTP servers,
the terminal) and provides implementations of the core port interfaces.

Adapter Organization:

- upstream/: Client for the backing employee store
- rest/: HTTP server exposing the employee REST interface
- cli/: Command-line interface for the same operations
"""
