"""Core domain logic for the Roster employee proxy.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .errors import (
    FieldViolation,
    NotFound,
    RosterError,
    UpstreamError,
    ValidationError,
)
from .models import (
    EmployeeCreateRequest,
    EmployeeRecord,
    UpstreamEnvelope,
)

__all__ = [
    "EmployeeCreateRequest",
    "EmployeeRecord",
    "FieldViolation",
    "NotFound",
    "RosterError",
    "UpstreamEnvelope",
    "UpstreamError",
    "ValidationError",
]
