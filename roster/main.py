"""Composition root for the Roster employee proxy.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Dependency injection
- Entry point selection (server, CLI)
"""

import asyncio
import json
import logging
import sys

from roster.adapters.cli.commands import run_command
from roster.adapters.rest.http_server import EmployeeHTTPServer
from roster.adapters.rest.resource import EmployeeResource
from roster.adapters.upstream.http_client import UpstreamEmployeeClient
from roster.config import Settings, load_settings
from roster.core.employee_service import EmployeeService
from roster.core.ports import EmployeeQueryPort


async def _run_cli_interactive(
    query_port: EmployeeQueryPort, top_earners_limit: int = 10
) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for employee commands.

    Args:
        query_port: EmployeeQueryPort the commands run against.
        top_earners_limit: Default limit for the top command.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            # input() blocks, so read it off the event loop
            command_line = await loop.run_in_executor(None, input, "roster> ")
            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            if not isinstance(args, dict):
                logger.error("Arguments must be a JSON object. Use 'help' for command syntax.")
                continue

            try:
                result = await run_command(query_port, command, args, top_earners_limit)
                if "output" in result:
                    print(result["output"])
                else:
                    print(json.dumps(result, indent=2, default=str))
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))

        except EOFError:
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  list
    List all employees.
    Optional: format ("json" or "text")

    Example: list {"format": "text"}

  search
    List employees whose name contains a fragment (case-insensitive).
    Optional: fragment, format

    Example: search {"fragment": "john"}

  get
    Show one employee.
    Required: id

    Example: get {"id": "uuid-here"}

  highest
    Show the highest salary.

  top
    Show the names of the highest earners.
    Optional: limit

    Example: top {"limit": 5}

  create
    Create an employee.
    Required: name, salary, age, title

    Example: create {"name": "Jane Smith", "salary": 85000, "age": 28, "title": "Engineer"}

  delete
    Delete an employee by id.
    Required: id

    Example: delete {"id": "uuid-here"}

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # httpx logs every request at INFO; keep it for debug runs only
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def build_client(settings: Settings) -> UpstreamEmployeeClient:
    """Instantiate the upstream client from settings."""
    return UpstreamEmployeeClient(
        base_url=settings.upstream_base_url,
        timeout_seconds=settings.request_timeout_seconds,
        max_attempts=settings.retry_max_attempts,
        retry_unit_ms=settings.retry_unit_ms,
        retry_jitter_ms=settings.retry_jitter_ms,
    )


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start the application.

    This is the composition root: the single place where all components
    are instantiated and wired together.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate the upstream client
    4. Initialize the employee service
    5. Select and start run mode
    """
    settings = load_settings()

    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info("Loading Roster employee proxy...")

    client = build_client(settings)
    logger.info(f"Upstream employee store: {settings.upstream_base_url}")

    service = EmployeeService(store=client)

    logger.info(f"Starting in {settings.run_mode} mode...")

    try:
        if settings.run_mode == "server":
            resource = EmployeeResource(
                query_port=service,
                top_earners_limit=settings.top_earners_limit,
            )
            http_server = EmployeeHTTPServer(
                resource=resource,
                host=settings.server_host,
                port=settings.server_port,
                request_deadline_seconds=settings.request_deadline_seconds,
            )
            await http_server.start()

            try:
                while True:
                    await asyncio.sleep(1)
            finally:
                await http_server.stop()

        elif settings.run_mode == "cli":
            await _run_cli_interactive(service, settings.top_earners_limit)

        else:
            logger.error(f"Unknown run mode: {settings.run_mode}")
            sys.exit(1)

    finally:
        await client.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Graceful shutdown completed")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
