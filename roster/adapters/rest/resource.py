"""Employee REST resource.

Translates between JSON-ready payloads and EmployeeQueryPort calls.
Transport concerns (routing, status codes, sockets) live in
http_server.py; this module only shapes request and response bodies.
"""

import logging
from typing import Any

from roster.core.models import EmployeeCreateRequest, EmployeeRecord
from roster.core.ports import EmployeeQueryPort

logger = logging.getLogger(__name__)


def serialize_employee(employee: EmployeeRecord) -> dict[str, Any]:
    """Render an employee using the upstream field names."""
    return {
        "id": employee.id,
        "employee_name": employee.name,
        "employee_salary": employee.salary,
        "employee_age": employee.age,
        "employee_title": employee.title,
        "employee_email": employee.email,
    }


def parse_create_request(body: dict[str, Any]) -> EmployeeCreateRequest:
    """Build a creation request from a JSON body.

    Missing fields become None so validation reports them alongside any
    other violations instead of failing on the first.
    """
    return EmployeeCreateRequest(
        name=body.get("name"),
        salary=body.get("salary"),
        age=body.get("age"),
        title=body.get("title"),
    )


class EmployeeResource:
    """Async handlers behind the employee REST routes."""

    def __init__(self, query_port: EmployeeQueryPort, top_earners_limit: int = 10):
        """Initialize the resource.

        Args:
            query_port: EmployeeQueryPort implementation to delegate to.
            top_earners_limit: Number of names the top earners route returns.
        """
        self.query_port = query_port
        self.top_earners_limit = top_earners_limit

    async def handle_list(self) -> list[dict[str, Any]]:
        employees = await self.query_port.list_all()
        logger.info(f"Retrieved {len(employees)} employees")
        return [serialize_employee(e) for e in employees]

    async def handle_search(self, fragment: str) -> list[dict[str, Any]]:
        employees = await self.query_port.search(fragment)
        logger.info(f"Found {len(employees)} employees matching search term: {fragment}")
        return [serialize_employee(e) for e in employees]

    async def handle_get(self, employee_id: str) -> dict[str, Any]:
        employee = await self.query_port.get_by_id(employee_id)
        return serialize_employee(employee)

    async def handle_highest_salary(self) -> int:
        highest = await self.query_port.highest_salary()
        logger.info(f"Highest salary found: {highest}")
        return highest

    async def handle_top_earners(self) -> list[str]:
        return await self.query_port.top_earner_names(self.top_earners_limit)

    async def handle_create(self, body: dict[str, Any]) -> dict[str, Any]:
        """Create an employee from a JSON body.

        Raises:
            ValidationError: If the body breaks any domain constraint.
        """
        created = await self.query_port.create(parse_create_request(body))
        logger.info(
            f"Created employee {created.name} with id {created.id}",
            extra={"employee_id": created.id},
        )
        return serialize_employee(created)

    async def handle_delete(self, employee_id: str) -> str:
        name = await self.query_port.delete_by_id(employee_id)
        logger.info(f"Deleted employee: {name}", extra={"employee_id": employee_id})
        return name
