"""Tests for CLI command handling.

Covers:
- CLICommandHandler: result dictionaries for each employee command
- run_command: command dispatch and argument checks
"""

from unittest.mock import AsyncMock

import pytest

from roster.adapters.cli.commands import CLICommandHandler, run_command
from roster.core.errors import NotFound, UpstreamError
from roster.core.models import EmployeeRecord
from roster.tests.fakes import FakeEmployeeQueryPort


@pytest.fixture
def employees() -> list[EmployeeRecord]:
    return [
        EmployeeRecord(id="1", name="John Doe", salary=75000, age=30, title="Developer", email=None),
        EmployeeRecord(id="2", name="Jane Smith", salary=85000, age=28, title="Senior Developer", email=None),
        EmployeeRecord(id="3", name="Bob Johnson", salary=95000, age=35, title="Tech Lead", email=None),
    ]


@pytest.fixture
def query_port(employees: list[EmployeeRecord]) -> FakeEmployeeQueryPort:
    return FakeEmployeeQueryPort(employees)


@pytest.fixture
def handler(query_port: FakeEmployeeQueryPort) -> CLICommandHandler:
    return CLICommandHandler(query_port)


@pytest.mark.asyncio
class TestCLICommandHandler:
    """Test suite for CLICommandHandler."""

    async def test_list_json(self, handler: CLICommandHandler) -> None:
        result = await handler.list_employees()

        assert result["status"] == "success"
        assert result["count"] == 3
        assert result["employees"][0]["employee_name"] == "John Doe"

    async def test_list_text(self, handler: CLICommandHandler) -> None:
        result = await handler.list_employees(output_format="text")

        assert "employees" not in result
        assert "Jane Smith" in result["output"]
        assert "85000" in result["output"]

    async def test_list_text_empty(self) -> None:
        handler = CLICommandHandler(FakeEmployeeQueryPort())
        result = await handler.list_employees(output_format="text")
        assert result["output"] == "No employees found."

    async def test_search(self, handler: CLICommandHandler) -> None:
        result = await handler.search_employees("JOHN")

        assert result["fragment"] == "JOHN"
        assert [e["employee_name"] for e in result["employees"]] == ["John Doe", "Bob Johnson"]

    async def test_get_employee(self, handler: CLICommandHandler) -> None:
        result = await handler.get_employee("2")
        assert result["employee"]["employee_name"] == "Jane Smith"

    async def test_get_unknown_employee(self, handler: CLICommandHandler) -> None:
        result = await handler.get_employee("999")

        assert result["status"] == "error"
        assert result["employee_id"] == "999"
        assert "999" in result["message"]

    async def test_highest_salary(self, handler: CLICommandHandler) -> None:
        result = await handler.highest_salary()
        assert result["highest_salary"] == 95000

    async def test_top_earners_default_limit(
        self, handler: CLICommandHandler, query_port: FakeEmployeeQueryPort
    ) -> None:
        result = await handler.top_earners()

        assert result["names"] == ["Bob Johnson", "Jane Smith", "John Doe"]
        assert query_port.calls[-1] == ("top_earner_names", (10,))

    async def test_top_earners_custom_limit(self, handler: CLICommandHandler) -> None:
        result = await handler.top_earners(1)
        assert result["names"] == ["Bob Johnson"]

    async def test_create_employee(self, handler: CLICommandHandler) -> None:
        result = await handler.create_employee(
            {"name": "Alice Brown", "salary": 65000, "age": 26, "title": "Developer"}
        )

        assert result["status"] == "success"
        assert result["employee"]["employee_name"] == "Alice Brown"

    async def test_create_invalid_lists_errors(self, handler: CLICommandHandler) -> None:
        result = await handler.create_employee({"name": "Alice", "salary": -1})

        assert result["status"] == "error"
        assert set(result["errors"]) == {"salary", "age", "title"}

    async def test_delete_employee(self, handler: CLICommandHandler) -> None:
        result = await handler.delete_employee("3", verbose=True)

        assert result["status"] == "success"
        assert result["name"] == "Bob Johnson"

    async def test_delete_not_found(self) -> None:
        query_port = AsyncMock()
        query_port.delete_by_id.side_effect = NotFound("7", "Failed to delete employee with id: 7")
        handler = CLICommandHandler(query_port)

        result = await handler.delete_employee("7")

        assert result == {
            "status": "error",
            "operation": "delete",
            "message": "Failed to delete employee with id: 7",
            "employee_id": "7",
        }

    async def test_upstream_failure_becomes_error_result(
        self, handler: CLICommandHandler, query_port: FakeEmployeeQueryPort
    ) -> None:
        query_port.error_to_raise = UpstreamError("upstream down")

        result = await handler.highest_salary()

        assert result["status"] == "error"
        assert result["message"] == "upstream down"


@pytest.mark.asyncio
class TestRunCommand:
    """Test suite for run_command dispatch."""

    async def test_run_list(self, query_port: FakeEmployeeQueryPort) -> None:
        result = await run_command(query_port, "list", {})
        assert result["operation"] == "list"

    async def test_run_search_without_fragment_matches_all(
        self, query_port: FakeEmployeeQueryPort
    ) -> None:
        result = await run_command(query_port, "search", {})
        assert result["count"] == 3

    async def test_run_get(self, query_port: FakeEmployeeQueryPort) -> None:
        result = await run_command(query_port, "get", {"id": 1})
        assert result["employee"]["id"] == "1"

    async def test_run_top_with_limit(self, query_port: FakeEmployeeQueryPort) -> None:
        result = await run_command(query_port, "top", {"limit": 2})
        assert result["names"] == ["Bob Johnson", "Jane Smith"]

    async def test_run_top_uses_configured_default_limit(
        self, query_port: FakeEmployeeQueryPort
    ) -> None:
        result = await run_command(query_port, "top", {}, top_earners_limit=2)

        assert result["names"] == ["Bob Johnson", "Jane Smith"]
        assert query_port.calls[-1] == ("top_earner_names", (2,))

    async def test_run_create(self, query_port: FakeEmployeeQueryPort) -> None:
        result = await run_command(
            query_port,
            "create",
            {"name": "Carol White", "salary": 70000, "age": 40, "title": "Manager"},
        )
        assert result["status"] == "success"

    async def test_run_delete_requires_id(self, query_port: FakeEmployeeQueryPort) -> None:
        with pytest.raises(ValueError, match="id"):
            await run_command(query_port, "delete", {})

    async def test_run_unknown_command(self, query_port: FakeEmployeeQueryPort) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            await run_command(query_port, "promote", {})
