"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic and adapters to
be tested without a running upstream store:

- FakeEmployeeStorePort: In-memory employee store with failure injection
- FakeEmployeeQueryPort: Canned query results with call tracking
"""

from .query import FakeEmployeeQueryPort
from .store import FakeEmployeeStorePort

__all__ = [
    "FakeEmployeeQueryPort",
    "FakeEmployeeStorePort",
]
