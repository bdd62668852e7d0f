"""Upstream employee store adapter.

Implements EmployeeStorePort by calling the mock employee REST API.
Decodes the upstream response envelope into core domain models and
retries transient failures with linear-growth backoff plus jitter.
"""

import asyncio
import logging
import random
import urllib.parse
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from roster.core.errors import UpstreamError
from roster.core.models import EmployeeCreateRequest, EmployeeRecord, UpstreamEnvelope
from roster.core.ports import EmployeeStorePort

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPLOYEES_ENDPOINT = "/api/v1/employee"

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_UNIT_MS = 2000
DEFAULT_RETRY_JITTER_MS = 1000


class MalformedEnvelopeError(Exception):
    """The upstream answered, but not with a decodable envelope."""


class UpstreamEmployeeClient(EmployeeStorePort):
    """HTTP client for the upstream employee store via REST API."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_unit_ms: int = DEFAULT_RETRY_UNIT_MS,
        retry_jitter_ms: int = DEFAULT_RETRY_JITTER_MS,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        random_source: random.Random | None = None,
    ):
        """Initialize the upstream client.

        Args:
            base_url: Base URL of the upstream store (e.g., http://localhost:8112)
            timeout_seconds: Per-request timeout for the HTTP call.
            max_attempts: Total attempts per operation, including the first.
            retry_unit_ms: Backoff unit; attempt N waits N units plus jitter.
            retry_jitter_ms: Upper bound (exclusive) of the random jitter.
            transport: Optional httpx transport (used by tests).
            sleep: Coroutine used to wait between attempts.
            random_source: Random generator for jitter.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.retry_unit_ms = retry_unit_ms
        self.retry_jitter_ms = retry_jitter_ms
        self._sleep = sleep
        self._random = random_source or random.Random()
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout_seconds,
            transport=transport,
            event_hooks={
                "request": [self._log_request],
                "response": [self._log_response],
            },
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    # ------------------------------------------------------------------
    # EmployeeStorePort
    # ------------------------------------------------------------------

    async def list_all(self) -> list[EmployeeRecord]:
        """Fetch all employees from the upstream store."""

        async def call() -> list[EmployeeRecord]:
            logger.info("Fetching all employees from upstream")
            envelope = await self._send("GET", EMPLOYEES_ENDPOINT)
            self._require_success(envelope, "Failed to fetch employees")
            if not isinstance(envelope.data, list):
                raise MalformedEnvelopeError("employee list payload is not a list")
            employees = [self._parse_employee(item) for item in envelope.data]
            logger.info(f"Successfully fetched {len(employees)} employees")
            return employees

        return await self._execute_with_retry("list_all", call)

    async def get_by_id(self, employee_id: str) -> EmployeeRecord:
        """Fetch a single employee by upstream id."""
        path = _employee_path(employee_id)

        async def call() -> EmployeeRecord:
            logger.info(f"Fetching employee with id: {employee_id}")
            envelope = await self._send("GET", path)
            self._require_success(envelope, "Failed to fetch employee")
            employee = self._parse_employee(envelope.data)
            logger.info(f"Successfully fetched employee: {employee.name}")
            return employee

        return await self._execute_with_retry("get_by_id", call)

    async def create(self, request: EmployeeCreateRequest) -> EmployeeRecord:
        """Create an employee upstream.

        Retried like every other call, so a create whose response was lost
        may be sent twice.
        """
        body = {
            "name": request.name,
            "salary": request.salary,
            "age": request.age,
            "title": request.title,
        }

        async def call() -> EmployeeRecord:
            logger.info(f"Creating new employee: {request.name}")
            envelope = await self._send("POST", EMPLOYEES_ENDPOINT, json=body)
            self._require_success(envelope, "Failed to create employee")
            employee = self._parse_employee(envelope.data)
            logger.info(f"Successfully created employee: {employee.name}")
            return employee

        return await self._execute_with_retry("create", call)

    async def delete_by_name(self, name: str) -> bool:
        """Delete an employee by name (the upstream has no delete by id)."""

        async def call() -> bool:
            logger.info(f"Deleting employee with name: {name}")
            envelope = await self._send("DELETE", EMPLOYEES_ENDPOINT, json={"name": name})
            self._require_success(envelope, "Failed to delete employee")
            if envelope.data is not None and not isinstance(envelope.data, bool):
                raise MalformedEnvelopeError("delete payload is not a boolean")
            deleted = envelope.data is True
            logger.info(f"Delete of employee {name} reported deleted={deleted}")
            return deleted

        return await self._execute_with_retry("delete_by_name", call)

    # ------------------------------------------------------------------
    # Retry
    # ------------------------------------------------------------------

    async def _execute_with_retry(
        self, operation: str, call: Callable[[], Awaitable[T]]
    ) -> T:
        """Run call, retrying transient failures with backoff and jitter.

        Terminal failures (UpstreamError raised by call, or a non-retryable
        HTTP status) propagate on the first attempt.

        Raises:
            UpstreamError: When attempts are exhausted, a failure is terminal,
                or the backoff sleep is cancelled.
        """
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await call()
            except UpstreamError:
                raise
            except httpx.HTTPStatusError as e:
                if not self._is_retryable_status(e.response.status_code):
                    raise UpstreamError(
                        f"{operation} rejected by upstream with status "
                        f"{e.response.status_code}"
                    ) from e
                last_error = e
            except (httpx.TransportError, MalformedEnvelopeError) as e:
                last_error = e

            logger.warning(
                f"Attempt {attempt} of {operation} failed: {last_error}",
                extra={"operation": operation, "attempt": attempt},
            )

            if attempt < self.max_attempts:
                delay_ms = self._backoff_ms(attempt)
                logger.info(
                    f"Retrying {operation} in {delay_ms:.0f} ms "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                try:
                    await self._sleep(delay_ms / 1000)
                except asyncio.CancelledError as e:
                    raise UpstreamError(f"Retry of {operation} interrupted") from e

        logger.error(f"All {self.max_attempts} attempts of {operation} failed")
        raise UpstreamError(
            f"Failed to execute {operation} after {self.max_attempts} attempts"
        ) from last_error

    def _backoff_ms(self, attempt: int) -> float:
        """Delay before the next attempt: attempt units plus jitter."""
        jitter = self._random.random() * self.retry_jitter_ms
        return self.retry_unit_ms * attempt + jitter

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        """Rate limiting and server errors are worth retrying; other 4xx are not."""
        return status_code == 429 or status_code >= 500

    # ------------------------------------------------------------------
    # Wire helpers
    # ------------------------------------------------------------------

    async def _send(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> UpstreamEnvelope[Any]:
        """Issue one request and decode its envelope."""
        response = await self.client.request(method, path, json=json)
        response.raise_for_status()
        return self._parse_envelope(response)

    @staticmethod
    def _parse_envelope(response: httpx.Response) -> UpstreamEnvelope[Any]:
        """Decode the upstream envelope from a response body."""
        if not response.content:
            raise MalformedEnvelopeError("upstream response has no body")
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedEnvelopeError(f"upstream response is not JSON: {e}") from e
        if not isinstance(body, dict):
            raise MalformedEnvelopeError("upstream response is not a JSON object")

        status = body.get("status")
        error = body.get("error")
        return UpstreamEnvelope(
            data=body.get("data"),
            status=status if isinstance(status, str) else None,
            error=str(error) if error is not None else None,
        )

    @staticmethod
    def _require_success(envelope: UpstreamEnvelope[Any], failure: str) -> None:
        """Raise a terminal UpstreamError if the envelope reports failure."""
        if not envelope.is_success():
            raise UpstreamError(f"{failure}: {envelope.error or 'Unknown error'}")

    @staticmethod
    def _parse_employee(raw: Any) -> EmployeeRecord:
        """Convert an upstream employee object to an EmployeeRecord."""
        if not isinstance(raw, dict):
            raise MalformedEnvelopeError("employee payload is not a JSON object")

        employee_id = raw.get("id")
        if employee_id is None or employee_id == "":
            raise MalformedEnvelopeError("employee payload has no id")

        try:
            return EmployeeRecord(
                id=str(employee_id),
                name=_optional_str(raw.get("employee_name")),
                salary=_optional_int(raw.get("employee_salary"), "employee_salary"),
                age=_optional_int(raw.get("employee_age"), "employee_age"),
                title=_optional_str(raw.get("employee_title")),
                email=_optional_str(raw.get("employee_email")),
            )
        except ValueError as e:
            raise MalformedEnvelopeError(f"invalid employee payload: {e}") from e

    async def _log_request(self, request: httpx.Request) -> None:
        """Log outgoing requests at debug level."""
        logger.debug(f"Request: {request.method} {request.url}")
        if request.content:
            logger.debug(f"Request body: {request.content.decode(errors='replace')}")

    async def _log_response(self, response: httpx.Response) -> None:
        """Log response status at debug level."""
        logger.debug(f"Response status: {response.status_code}")


def _employee_path(employee_id: str) -> str:
    """Path of one employee, with the id escaped as a single path segment.

    Raises:
        UpstreamError: If the id is empty or a dot segment, which no escaping
            keeps from resolving to a different path.
    """
    if employee_id in ("", ".", ".."):
        raise UpstreamError(f"Invalid employee id: {employee_id!r}")
    return f"{EMPLOYEES_ENDPOINT}/{urllib.parse.quote(employee_id, safe='')}"


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _optional_int(value: Any, field: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    return value
