"""Employee service: implements EmployeeQueryPort over the upstream store.

This is a core service that derives read-only views (search, highest
salary, top earners) from the full collection the store returns, and
translates id-keyed deletes into the name-keyed delete the store offers.
It never retries: any store failure is terminal for the call.
"""

import logging

from .errors import NotFound
from .models import EmployeeCreateRequest, EmployeeRecord
from .ports import EmployeeQueryPort, EmployeeStorePort

logger = logging.getLogger(__name__)

DEFAULT_TOP_EARNERS_LIMIT = 10


class EmployeeService(EmployeeQueryPort):
    """Core implementation of EmployeeQueryPort.

    Stateless beyond its injected store; every call fetches fresh data.
    """

    def __init__(self, store: EmployeeStorePort):
        """Initialize the employee service.

        Args:
            store: EmployeeStorePort implementation for upstream access.
        """
        self.store = store

    async def list_all(self) -> list[EmployeeRecord]:
        """Return every employee in upstream order."""
        logger.info("Fetching all employees")
        return await self.store.list_all()

    async def search(self, fragment: str) -> list[EmployeeRecord]:
        """Return employees whose name contains fragment, ignoring case.

        Records without a name are skipped. An empty fragment matches every
        named record. Upstream order is preserved.
        """
        logger.info("Searching employees by name", extra={"fragment": fragment})
        needle = fragment.lower()
        employees = await self.store.list_all()
        return [
            employee
            for employee in employees
            if employee.name is not None and needle in employee.name.lower()
        ]

    async def get_by_id(self, employee_id: str) -> EmployeeRecord:
        """Return one employee, mapping any store failure to NotFound."""
        logger.info("Fetching employee by id", extra={"employee_id": employee_id})
        try:
            return await self.store.get_by_id(employee_id)
        except Exception as e:
            logger.error(
                f"Employee not found with id: {employee_id}",
                extra={"employee_id": employee_id, "cause": str(e)},
            )
            raise NotFound(employee_id) from e

    async def highest_salary(self) -> int:
        """Return the highest salary among salaried employees, or 0."""
        logger.info("Finding highest salary among all employees")
        employees = await self.store.list_all()
        return max(
            (e.salary for e in employees if e.salary is not None),
            default=0,
        )

    async def top_earner_names(
        self, limit: int = DEFAULT_TOP_EARNERS_LIMIT
    ) -> list[str]:
        """Return names of the `limit` highest earners.

        Employees without a salary or a name are ignored. Equal salaries
        keep their upstream order. Fewer than `limit` candidates returns
        what exists.

        Raises:
            ValueError: If limit is negative.
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        logger.info("Finding top earning employees", extra={"limit": limit})
        employees = await self.store.list_all()
        salaried = [
            e for e in employees if e.salary is not None and e.name is not None
        ]
        # sorted() is stable, so ties stay in upstream order
        ranked = sorted(salaried, key=lambda e: e.salary, reverse=True)
        return [e.name for e in ranked[:limit]]

    async def create(self, request: EmployeeCreateRequest) -> EmployeeRecord:
        """Validate the request and create the employee upstream.

        Raises:
            ValidationError: If any field breaks a domain constraint.
            UpstreamError: If the store fails.
        """
        request.validate()
        logger.info("Creating new employee", extra={"employee_name": request.name})
        return await self.store.create(request)

    async def delete_by_id(self, employee_id: str) -> str:
        """Delete an employee by id and return the deleted name.

        The store deletes by name, so the id is resolved first. If the store
        then reports nothing was deleted, that is treated as NotFound too,
        even though the id did resolve (e.g. a concurrent delete).

        Raises:
            NotFound: If the id cannot be resolved or nothing was deleted.
            UpstreamError: If the delete call itself fails.
        """
        logger.info("Deleting employee by id", extra={"employee_id": employee_id})

        employee = await self.get_by_id(employee_id)
        name = employee.name
        if name is None:
            raise NotFound(
                employee_id,
                f"Employee {employee_id} has no name to delete by",
            )

        deleted = await self.store.delete_by_name(name)
        if not deleted:
            raise NotFound(
                employee_id,
                f"Failed to delete employee with id: {employee_id}",
            )

        logger.info(
            f"Deleted employee {name}",
            extra={"employee_id": employee_id, "employee_name": name},
        )
        return name
