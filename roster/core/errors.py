"""Error kinds raised by the Roster core.

Adapters map these onto their own surfaces (HTTP status codes, CLI
result dictionaries); the core itself knows nothing about transports.
"""

from dataclasses import dataclass


class RosterError(Exception):
    """Base class for all Roster domain errors."""


class UpstreamError(RosterError):
    """The upstream store failed or reported an unsuccessful envelope.

    Raised by the upstream client after its retries are exhausted, or
    immediately for failures that retrying cannot fix. The last underlying
    failure is available as ``__cause__``.
    """


class NotFound(RosterError):
    """The requested employee does not exist (or vanished before delete)."""

    def __init__(self, employee_id: str, message: str | None = None):
        self.employee_id = employee_id
        super().__init__(message or f"Employee not found with id: {employee_id}")


@dataclass(frozen=True)
class FieldViolation:
    """A single input field that failed a domain constraint."""

    field: str
    message: str


class ValidationError(RosterError):
    """Input failed one or more domain constraints.

    Carries every violation at once so callers can report all offending
    fields together.
    """

    def __init__(self, violations: list[FieldViolation]):
        if not violations:
            raise ValueError("ValidationError requires at least one violation")
        self.violations = tuple(violations)
        summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"Invalid employee input: {summary}")

    def as_dict(self) -> dict[str, str]:
        """Map each offending field to its message."""
        return {v.field: v.message for v in self.violations}
