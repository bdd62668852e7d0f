"""Port interfaces for the Roster employee proxy.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - EmployeeStorePort: CRUD against the upstream employee store

2. **Driving Ports** (adapters/external systems call into core)
   - EmployeeQueryPort: Lookups, aggregations and id-keyed delete
"""

from abc import ABC, abstractmethod

from .models import EmployeeCreateRequest, EmployeeRecord


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class EmployeeStorePort(ABC):
    """Port for reaching the upstream employee store.

    Adapters implementing this port hide transport details (HTTP, retries,
    envelope decoding) and return core domain models.

    Implementations must handle:
    - Retrying transient failures before giving up
    - Rejecting unsuccessful upstream envelopes
    """

    @abstractmethod
    async def list_all(self) -> list[EmployeeRecord]:
        """Retrieve the full employee collection.

        Returns:
            All records in upstream order. Empty list if the store is empty.

        Raises:
            UpstreamError: If the store is unreachable or reports failure.
        """

    @abstractmethod
    async def get_by_id(self, employee_id: str) -> EmployeeRecord:
        """Retrieve a single employee.

        Args:
            employee_id: Upstream identifier of the employee.

        Raises:
            UpstreamError: If the store is unreachable, the record does not
                exist, or the store reports failure.
        """

    @abstractmethod
    async def create(self, request: EmployeeCreateRequest) -> EmployeeRecord:
        """Create an employee and return the stored record.

        Args:
            request: Already validated creation request.

        Returns:
            The upstream record, including its generated id.

        Raises:
            UpstreamError: If the store is unreachable or reports failure.
        """

    @abstractmethod
    async def delete_by_name(self, name: str) -> bool:
        """Delete an employee keyed by name.

        The upstream store has no delete-by-id operation.

        Args:
            name: Exact employee name.

        Returns:
            True if a record was actually removed.

        Raises:
            UpstreamError: If the store is unreachable or reports failure.
        """


# ============================================================================
# DRIVING PORTS (Adapters/external systems call into core)
# ============================================================================


class EmployeeQueryPort(ABC):
    """Port for employee lookups and derived views.

    Driving port: the REST server and CLI invoke these methods.
    Implementations live in the core (employee_service.py).
    """

    @abstractmethod
    async def list_all(self) -> list[EmployeeRecord]:
        """Return every employee."""

    @abstractmethod
    async def search(self, fragment: str) -> list[EmployeeRecord]:
        """Return named employees whose name contains fragment, ignoring case."""

    @abstractmethod
    async def get_by_id(self, employee_id: str) -> EmployeeRecord:
        """Return one employee.

        Raises:
            NotFound: If the id cannot be resolved.
        """

    @abstractmethod
    async def highest_salary(self) -> int:
        """Return the highest salary, or 0 if no employee has one."""

    @abstractmethod
    async def top_earner_names(self, limit: int = 10) -> list[str]:
        """Return names of the top `limit` earners, highest first."""

    @abstractmethod
    async def create(self, request: EmployeeCreateRequest) -> EmployeeRecord:
        """Validate and create an employee.

        Raises:
            ValidationError: If the request breaks any domain constraint.
        """

    @abstractmethod
    async def delete_by_id(self, employee_id: str) -> str:
        """Delete an employee and return the deleted name.

        Raises:
            NotFound: If the id cannot be resolved or nothing was deleted.
        """
