"""Unit tests for core domain models and errors."""

import pytest

from roster.core.errors import FieldViolation, NotFound, ValidationError
from roster.core.models import (
    EmployeeCreateRequest,
    EmployeeRecord,
    UpstreamEnvelope,
)


class TestEmployeeRecord:
    """Tests for EmployeeRecord invariants."""

    def test_valid_record(self) -> None:
        record = EmployeeRecord(
            id="1",
            name="John Doe",
            salary=75000,
            age=30,
            title="Developer",
            email="john@company.com",
        )
        assert record.name == "John Doe"
        assert record.salary == 75000

    def test_optional_fields_may_be_absent(self) -> None:
        record = EmployeeRecord(
            id="1", name=None, salary=None, age=None, title=None, email=None
        )
        assert record.name is None
        assert record.salary is None

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="id"):
            EmployeeRecord(id="", name="X", salary=1, age=20, title="T", email=None)

    def test_negative_salary_rejected(self) -> None:
        with pytest.raises(ValueError, match="salary"):
            EmployeeRecord(id="1", name="X", salary=-1, age=20, title="T", email=None)

    def test_record_is_immutable(self) -> None:
        record = EmployeeRecord(
            id="1", name="X", salary=1, age=20, title="T", email=None
        )
        with pytest.raises(AttributeError):
            record.name = "Y"  # type: ignore[misc]


class TestEmployeeCreateRequest:
    """Tests for creation request validation."""

    def test_valid_request_passes(self) -> None:
        request = EmployeeCreateRequest(
            name="Jane Smith", salary=85000, age=28, title="Senior Developer"
        )
        request.validate()
        assert request.violations() == []

    @pytest.mark.parametrize("age", [16, 75])
    def test_age_bounds_are_inclusive(self, age: int) -> None:
        request = EmployeeCreateRequest(name="A", salary=1, age=age, title="T")
        assert request.violations() == []

    def test_blank_name_rejected(self) -> None:
        request = EmployeeCreateRequest(name="   ", salary=1, age=30, title="T")
        with pytest.raises(ValidationError) as exc_info:
            request.validate()
        assert exc_info.value.as_dict() == {"name": "Employee name cannot be blank"}

    @pytest.mark.parametrize("salary", [0, -5])
    def test_non_positive_salary_rejected(self, salary: int) -> None:
        request = EmployeeCreateRequest(name="A", salary=salary, age=30, title="T")
        assert request.violations() == [
            FieldViolation("salary", "Salary must be greater than zero")
        ]

    def test_age_below_minimum_rejected(self) -> None:
        request = EmployeeCreateRequest(name="A", salary=1, age=15, title="T")
        assert request.violations() == [
            FieldViolation("age", "Employee age must be at least 16")
        ]

    def test_age_above_maximum_rejected(self) -> None:
        request = EmployeeCreateRequest(name="A", salary=1, age=76, title="T")
        assert request.violations() == [
            FieldViolation("age", "Employee age must be at most 75")
        ]

    def test_all_violations_reported_together(self) -> None:
        request = EmployeeCreateRequest(name="", salary=0, age=80, title="")
        with pytest.raises(ValidationError) as exc_info:
            request.validate()

        errors = exc_info.value.as_dict()
        assert set(errors) == {"name", "salary", "age", "title"}
        assert "name" in str(exc_info.value)
        assert "title" in str(exc_info.value)

    def test_missing_fields_reported_as_null(self) -> None:
        request = EmployeeCreateRequest(
            name=None, salary=None, age=None, title=None  # type: ignore[arg-type]
        )
        errors = {v.field: v.message for v in request.violations()}
        assert errors == {
            "name": "Employee name cannot be blank",
            "salary": "Salary cannot be null",
            "age": "Age cannot be null",
            "title": "Employee title cannot be blank",
        }

    def test_boolean_salary_is_not_an_integer(self) -> None:
        request = EmployeeCreateRequest(
            name="A", salary=True, age=30, title="T"  # type: ignore[arg-type]
        )
        assert [v.field for v in request.violations()] == ["salary"]


class TestUpstreamEnvelope:
    """Tests for the envelope success predicate."""

    def test_success_status_without_error(self) -> None:
        envelope = UpstreamEnvelope(data=[], status="Successfully processed request.")
        assert envelope.is_success()

    def test_error_present_is_failure(self) -> None:
        envelope = UpstreamEnvelope(
            data=None,
            status="Successfully processed request.",
            error="boom",
        )
        assert not envelope.is_success()

    def test_missing_status_is_failure(self) -> None:
        assert not UpstreamEnvelope(data=[], status=None).is_success()

    def test_other_status_wording_is_failure(self) -> None:
        envelope = UpstreamEnvelope(data=[], status="Processed request.")
        assert not envelope.is_success()


class TestErrors:
    """Tests for error kinds."""

    def test_not_found_default_message_names_id(self) -> None:
        error = NotFound("999")
        assert error.employee_id == "999"
        assert "999" in str(error)

    def test_not_found_custom_message(self) -> None:
        error = NotFound("7", "Failed to delete employee with id: 7")
        assert str(error) == "Failed to delete employee with id: 7"

    def test_validation_error_requires_violations(self) -> None:
        with pytest.raises(ValueError):
            ValidationError([])
