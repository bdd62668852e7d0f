"""Domain models for the Roster employee proxy.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import FieldViolation, ValidationError

T = TypeVar("T")

MIN_EMPLOYEE_AGE = 16
MAX_EMPLOYEE_AGE = 75

# Marker the upstream store puts in its status text on success
# (e.g. "Successfully processed request.").
SUCCESS_STATUS_MARKER = "Successfully"


@dataclass(frozen=True)
class EmployeeRecord:
    """A single employee as returned by the upstream store.

    The core's normalized representation of the upstream payload. Fields
    other than ``id`` may be absent on malformed upstream data; the
    aggregation logic skips records missing the field it needs.
    """

    id: str
    name: str | None
    salary: int | None
    age: int | None
    title: str | None
    email: str | None

    def __post_init__(self) -> None:
        """Validate record invariants on creation."""
        if not self.id:
            raise ValueError("id must be a non-empty string")
        if self.salary is not None and self.salary < 0:
            raise ValueError(f"salary must be non-negative, got {self.salary}")


@dataclass(frozen=True)
class EmployeeCreateRequest:
    """Input for creating a new employee in the upstream store."""

    name: str
    salary: int
    age: int
    title: str

    def violations(self) -> list[FieldViolation]:
        """Return every constraint this request breaks, in field order."""
        found: list[FieldViolation] = []
        if not isinstance(self.name, str) or not self.name.strip():
            found.append(FieldViolation("name", "Employee name cannot be blank"))
        if not _is_int(self.salary):
            found.append(FieldViolation("salary", "Salary cannot be null"))
        elif self.salary <= 0:
            found.append(FieldViolation("salary", "Salary must be greater than zero"))
        if not _is_int(self.age):
            found.append(FieldViolation("age", "Age cannot be null"))
        elif self.age < MIN_EMPLOYEE_AGE:
            found.append(
                FieldViolation("age", f"Employee age must be at least {MIN_EMPLOYEE_AGE}")
            )
        elif self.age > MAX_EMPLOYEE_AGE:
            found.append(
                FieldViolation("age", f"Employee age must be at most {MAX_EMPLOYEE_AGE}")
            )
        if not isinstance(self.title, str) or not self.title.strip():
            found.append(FieldViolation("title", "Employee title cannot be blank"))
        return found

    def validate(self) -> None:
        """Raise ValidationError listing all violated fields, if any."""
        found = self.violations()
        if found:
            raise ValidationError(found)


@dataclass(frozen=True)
class UpstreamEnvelope(Generic[T]):
    """Upstream response wrapper: payload, status text and optional error."""

    data: T | None
    status: str | None
    error: str | None = None

    def is_success(self) -> bool:
        """Return True if the upstream reported success.

        Success is judged on status wording alone: no error present and the
        status text contains SUCCESS_STATUS_MARKER. A change in upstream
        wording breaks this check, so keep it the only place that does so.
        """
        return (
            self.error is None
            and self.status is not None
            and SUCCESS_STATUS_MARKER in self.status
        )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
