"""HTTP server adapter for the employee REST interface.

Provides a simple HTTP server using Python's built-in http.server module,
running in a worker thread, with each request's coroutine scheduled on the
application's asyncio event loop under a per-request deadline.

Error kinds from the core are mapped to status codes here:
ValidationError -> 400, NotFound -> 404, UpstreamError -> 500,
deadline exceeded -> 504.
"""

import asyncio
import concurrent.futures
import json
import logging
import urllib.parse
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Coroutine

from roster.adapters.rest.resource import EmployeeResource
from roster.core.errors import NotFound, UpstreamError, ValidationError

logger = logging.getLogger(__name__)

EMPLOYEE_PREFIX = "/api/v1/employee"
MAX_BODY_SIZE = 1024 * 1024


def make_employee_handler(
    resource: EmployeeResource,
    event_loop: asyncio.AbstractEventLoop,
    request_deadline_seconds: float,
) -> type[BaseHTTPRequestHandler]:
    """Factory to create an EmployeeHTTPHandler class bound to its dependencies.

    Args:
        resource: Resource that turns requests into core calls
        event_loop: Event loop the core coroutines run on
        request_deadline_seconds: Time budget per request, retries included

    Returns:
        An EmployeeHTTPHandler class configured with the provided dependencies
    """

    class EmployeeHTTPHandler(BaseHTTPRequestHandler):
        """HTTP request handler for employee endpoints."""

        def do_GET(self) -> None:
            path = self._route_path()

            if path == "/health":
                self._send_json(200, {"status": "healthy"})
            elif path == EMPLOYEE_PREFIX:
                self._run(resource.handle_list())
            elif path == f"{EMPLOYEE_PREFIX}/highestSalary":
                self._run(resource.handle_highest_salary())
            elif path == f"{EMPLOYEE_PREFIX}/topTenHighestEarningEmployeeNames":
                self._run(resource.handle_top_earners())
            elif path.startswith(f"{EMPLOYEE_PREFIX}/search/"):
                fragment = path[len(f"{EMPLOYEE_PREFIX}/search/"):]
                self._run(resource.handle_search(fragment))
            elif (employee_id := self._employee_id(path)) is not None:
                self._run(resource.handle_get(employee_id))
            else:
                self._send_json(404, {"error": "Not found"})

        def do_POST(self) -> None:
            if self._route_path() != EMPLOYEE_PREFIX:
                self._send_json(404, {"error": "Not found"})
                return

            try:
                content_length = int(self.headers.get("Content-Length", 0))
            except ValueError:
                content_length = -1
            if content_length < 0:
                self._send_json(400, {"error": "Invalid Content-Length header"})
                return
            if content_length > MAX_BODY_SIZE:
                self._send_json(413, {"error": "Request body too large"})
                return

            body = self.rfile.read(content_length) if content_length > 0 else b""
            try:
                data = json.loads(body) if body else {}
            except json.JSONDecodeError:
                self._send_json(400, {"error": "Invalid JSON body"})
                return
            if not isinstance(data, dict):
                self._send_json(400, {"error": "JSON body must be an object"})
                return

            self._run(resource.handle_create(data), success_status=201)

        def do_DELETE(self) -> None:
            employee_id = self._employee_id(self._route_path())
            if employee_id is None:
                self._send_json(404, {"error": "Not found"})
                return
            self._run(resource.handle_delete(employee_id))

        def _route_path(self) -> str:
            """Request path without query string, percent-decoded."""
            return urllib.parse.unquote(urllib.parse.urlsplit(self.path).path)

        @staticmethod
        def _employee_id(path: str) -> str | None:
            """Extract {id} from /api/v1/employee/{id}, if the path has that shape."""
            if not path.startswith(f"{EMPLOYEE_PREFIX}/"):
                return None
            remainder = path[len(EMPLOYEE_PREFIX) + 1:]
            if not remainder or "/" in remainder:
                return None
            return remainder

        def _run(
            self, coro: Coroutine[Any, Any, Any], success_status: int = 200
        ) -> None:
            """Run a resource coroutine on the event loop and send its result."""
            future = asyncio.run_coroutine_threadsafe(coro, event_loop)
            try:
                result = future.result(timeout=request_deadline_seconds)
            except concurrent.futures.TimeoutError:
                future.cancel()
                logger.error(
                    f"Request {self.command} {self.path} exceeded "
                    f"{request_deadline_seconds}s deadline"
                )
                self._send_json(504, {"error": "Upstream request timed out"})
            except ValidationError as e:
                logger.error(f"Validation error: {e}")
                self._send_json(400, e.as_dict())
            except NotFound as e:
                logger.error(f"Employee not found: {e}")
                self._send_json(404, {"error": str(e)})
            except UpstreamError as e:
                logger.error(f"Employee service error: {e}", exc_info=True)
                self._send_json(500, {"error": str(e)})
            except Exception as e:
                logger.error(f"Unexpected error handling request: {e}", exc_info=True)
                self._send_json(500, {"error": "An unexpected error occurred"})
            else:
                self._send_json(success_status, result)

        def _send_json(self, status: int, data: Any) -> None:
            """Send a JSON response."""
            payload = json.dumps(data).encode()
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format: str, *args: Any) -> None:
            """Log HTTP request."""
            logger.debug(f"HTTP {self.client_address[0]}: {format % args}")

    return EmployeeHTTPHandler


class EmployeeHTTPServer:
    """REST server adapter for employee operations."""

    def __init__(
        self,
        resource: EmployeeResource,
        host: str = "0.0.0.0",
        port: int = 8111,
        request_deadline_seconds: float = 30.0,
    ):
        """Initialize the HTTP server.

        Args:
            resource: EmployeeResource instance to handle requests.
            host: Host to listen on (default 0.0.0.0).
            port: Port to listen on (default 8111, 0 picks a free port).
            request_deadline_seconds: Time budget per request.
        """
        if request_deadline_seconds <= 0:
            raise ValueError("request_deadline_seconds must be positive")

        self.resource = resource
        self.host = host
        self.port = port
        self.request_deadline_seconds = request_deadline_seconds
        self.server: HTTPServer | None = None
        self._server_task: asyncio.Task[None] | None = None

    @property
    def bound_port(self) -> int | None:
        """Port actually bound, once started."""
        if self.server is None:
            return None
        return self.server.server_address[1]

    async def start(self) -> None:
        """Start the HTTP server."""
        logger.info(f"Starting employee HTTP server on {self.host}:{self.port}")

        handler_class = make_employee_handler(
            resource=self.resource,
            event_loop=asyncio.get_running_loop(),
            request_deadline_seconds=self.request_deadline_seconds,
        )

        self.server = HTTPServer((self.host, self.port), handler_class)

        # Blocking serve loop runs in a thread so the event loop stays free
        self._server_task = asyncio.create_task(self._run_server())
        logger.info(f"Employee HTTP server listening on port {self.bound_port}")

    async def _run_server(self) -> None:
        """Run the HTTP server loop in a thread pool."""
        if not self.server:
            return

        try:
            await asyncio.to_thread(self.server.serve_forever)
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(f"Employee HTTP server error: {e}", exc_info=True)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server:
            await asyncio.to_thread(self.server.shutdown)
            self.server.server_close()
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
        logger.info("Employee HTTP server stopped")
