"""Fake EmployeeQueryPort implementation for testing."""

from roster.core.errors import NotFound
from roster.core.models import EmployeeCreateRequest, EmployeeRecord
from roster.core.ports import EmployeeQueryPort


class FakeEmployeeQueryPort(EmployeeQueryPort):
    """In-memory query port for testing adapters.

    Returns canned results and records every call for test assertions.
    Set ``error_to_raise`` to make every operation fail.
    """

    def __init__(self, employees: list[EmployeeRecord] | None = None) -> None:
        """Initialize with optional canned employees."""
        self.employees: list[EmployeeRecord] = list(employees or [])
        self.calls: list[tuple[str, tuple]] = []
        self.error_to_raise: Exception | None = None

    def _record(self, operation: str, *args: object) -> None:
        self.calls.append((operation, args))
        if self.error_to_raise:
            raise self.error_to_raise

    async def list_all(self) -> list[EmployeeRecord]:
        self._record("list_all")
        return list(self.employees)

    async def search(self, fragment: str) -> list[EmployeeRecord]:
        self._record("search", fragment)
        return [
            e for e in self.employees
            if e.name is not None and fragment.lower() in e.name.lower()
        ]

    async def get_by_id(self, employee_id: str) -> EmployeeRecord:
        self._record("get_by_id", employee_id)
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        raise NotFound(employee_id)

    async def highest_salary(self) -> int:
        self._record("highest_salary")
        return max((e.salary for e in self.employees if e.salary is not None), default=0)

    async def top_earner_names(self, limit: int = 10) -> list[str]:
        self._record("top_earner_names", limit)
        ranked = sorted(
            (e for e in self.employees if e.salary is not None and e.name is not None),
            key=lambda e: e.salary,
            reverse=True,
        )
        return [e.name for e in ranked[:limit]]

    async def create(self, request: EmployeeCreateRequest) -> EmployeeRecord:
        self._record("create", request)
        request.validate()
        employee = EmployeeRecord(
            id=f"new-{len(self.employees) + 1}",
            name=request.name,
            salary=request.salary,
            age=request.age,
            title=request.title,
            email=None,
        )
        self.employees.append(employee)
        return employee

    async def delete_by_id(self, employee_id: str) -> str:
        self._record("delete_by_id", employee_id)
        for i, employee in enumerate(self.employees):
            if employee.id == employee_id:
                del self.employees[i]
                return employee.name
        raise NotFound(employee_id)
