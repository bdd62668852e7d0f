"""CLI command implementations for Roster.

Provides employee queries and changes through a command-line interface.

This adapter maps CLI commands (list, search, get, highest, top, create,
delete) to EmployeeQueryPort operations. It handles CLI-specific
formatting and error reporting: core errors come back as result
dictionaries with ``"status": "error"`` instead of propagating.
"""

import logging
from typing import Any

from roster.adapters.rest.resource import parse_create_request, serialize_employee
from roster.core.errors import RosterError, ValidationError
from roster.core.models import EmployeeRecord
from roster.core.ports import EmployeeQueryPort

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to EmployeeQueryPort."""

    def __init__(self, query_port: EmployeeQueryPort, top_earners_limit: int = 10):
        """Initialize the CLI command handler.

        Args:
            query_port: EmployeeQueryPort implementation to execute commands.
            top_earners_limit: Default limit for the top command.
        """
        self.query_port = query_port
        self.top_earners_limit = top_earners_limit

    async def list_employees(self, output_format: str = "json") -> dict[str, Any]:
        """List every employee.

        Args:
            output_format: "json" for structured data, "text" for a table.
        """
        try:
            employees = await self.query_port.list_all()
        except RosterError as e:
            return self._error("list", e)
        return self._employee_listing("list", employees, output_format)

    async def search_employees(
        self, fragment: str, output_format: str = "json"
    ) -> dict[str, Any]:
        """List employees whose name contains fragment (case-insensitive)."""
        try:
            employees = await self.query_port.search(fragment)
        except RosterError as e:
            return self._error("search", e)
        result = self._employee_listing("search", employees, output_format)
        result["fragment"] = fragment
        return result

    async def get_employee(self, employee_id: str) -> dict[str, Any]:
        try:
            employee = await self.query_port.get_by_id(employee_id)
        except RosterError as e:
            return self._error("get", e, employee_id=employee_id)
        return {
            "status": "success",
            "operation": "get",
            "employee": serialize_employee(employee),
        }

    async def highest_salary(self) -> dict[str, Any]:
        try:
            highest = await self.query_port.highest_salary()
        except RosterError as e:
            return self._error("highest", e)
        return {"status": "success", "operation": "highest", "highest_salary": highest}

    async def top_earners(self, limit: int | None = None) -> dict[str, Any]:
        """Names of the highest earners, highest first."""
        limit = self.top_earners_limit if limit is None else limit
        try:
            names = await self.query_port.top_earner_names(limit)
        except (RosterError, ValueError) as e:
            return self._error("top", e)
        return {"status": "success", "operation": "top", "limit": limit, "names": names}

    async def create_employee(
        self, fields: dict[str, Any], verbose: bool = False
    ) -> dict[str, Any]:
        """Create an employee from a dictionary of fields.

        Args:
            fields: name, salary, age and title.
            verbose: If True, log the created employee.
        """
        try:
            created = await self.query_port.create(parse_create_request(fields))
        except ValidationError as e:
            logger.error(f"Failed to create employee: {e}")
            result = self._error("create", e)
            result["errors"] = e.as_dict()
            return result
        except RosterError as e:
            return self._error("create", e)

        if verbose:
            logger.info(
                f"Created employee {created.name}",
                extra={"employee_id": created.id, "verbose": True},
            )
        return {
            "status": "success",
            "operation": "create",
            "employee": serialize_employee(created),
        }

    async def delete_employee(
        self, employee_id: str, verbose: bool = False
    ) -> dict[str, Any]:
        try:
            name = await self.query_port.delete_by_id(employee_id)
        except RosterError as e:
            return self._error("delete", e, employee_id=employee_id)

        if verbose:
            logger.info(
                f"Deleted employee {name}",
                extra={"employee_id": employee_id, "verbose": True},
            )
        return {
            "status": "success",
            "operation": "delete",
            "employee_id": employee_id,
            "message": f"Employee {name} deleted",
            "name": name,
        }

    def _employee_listing(
        self, operation: str, employees: list[EmployeeRecord], output_format: str
    ) -> dict[str, Any]:
        result: dict[str, Any] = {
            "status": "success",
            "operation": operation,
            "count": len(employees),
        }
        if output_format == "text":
            result["output"] = self._format_employees_text(employees)
        else:
            result["employees"] = [serialize_employee(e) for e in employees]
        return result

    @staticmethod
    def _error(operation: str, error: Exception, **context: Any) -> dict[str, Any]:
        logger.error(f"Command {operation} failed: {error}")
        return {
            "status": "error",
            "operation": operation,
            "message": str(error),
            **context,
        }

    @staticmethod
    def _format_employees_text(employees: list[EmployeeRecord]) -> str:
        """Format employees as a fixed-width table."""
        if not employees:
            return "No employees found."

        lines = [
            f"{'ID':<38} {'Name':<25} {'Salary':>10} {'Age':>4}  Title",
            "-" * 90,
        ]
        for e in employees:
            salary = "" if e.salary is None else str(e.salary)
            age = "" if e.age is None else str(e.age)
            lines.append(
                f"{e.id:<38} {(e.name or ''):<25} {salary:>10} {age:>4}  {e.title or ''}"
            )
        return "\n".join(lines)


async def run_command(
    query_port: EmployeeQueryPort,
    command: str,
    args: dict[str, Any],
    top_earners_limit: int = 10,
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler methods.

    Args:
        query_port: EmployeeQueryPort implementation.
        command: Command name ('list', 'search', 'get', 'highest', 'top',
            'create', 'delete').
        args: Dictionary of command arguments.
        top_earners_limit: Default limit for the top command.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If command is not recognized or a required argument is missing.
    """
    handler = CLICommandHandler(query_port, top_earners_limit)

    if command == "list":
        return await handler.list_employees(args.get("format", "json"))

    elif command == "search":
        return await handler.search_employees(
            args.get("fragment", ""),
            args.get("format", "json"),
        )

    elif command == "get":
        _require(args, "id")
        return await handler.get_employee(str(args["id"]))

    elif command == "highest":
        return await handler.highest_salary()

    elif command == "top":
        return await handler.top_earners(args.get("limit"))

    elif command == "create":
        return await handler.create_employee(args, args.get("verbose", False))

    elif command == "delete":
        _require(args, "id")
        return await handler.delete_employee(str(args["id"]), args.get("verbose", False))

    else:
        raise ValueError(f"Unknown command: {command}")


def _require(args: dict[str, Any], key: str) -> None:
    if key not in args:
        raise ValueError(f"Missing required parameter: {key}")
