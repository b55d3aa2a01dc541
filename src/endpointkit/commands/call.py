"""``endpointkit call`` -- invoke one generated function from the shell.

Builds the client from :func:`~endpointkit.config.resolve_client_config`,
generates the function for one entry of an endpoint table and awaits it
with the JSON arguments given on the command line. The status line goes to
stderr and the response data to stdout, so the output can be piped.

Exit codes follow :mod:`endpointkit.exit_codes`: invalid arguments exit
with 3, a response that breaks its schema with 4, and transport failures
with 5 (HTTP status) or 6 (network).
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import httpx
import typer

from endpointkit.client import ApiResponse, build_client, log_exchanges, raise_for_status
from endpointkit.commands import load_table_or_exit
from endpointkit.config import resolve_client_config
from endpointkit.endpoint import Endpoint
from endpointkit.exceptions import EndpointKitError, ResponseValidationError
from endpointkit.exit_codes import EXIT_CONNECTION_ERROR, EXIT_HTTP_STATUS, EXIT_INVALID_USAGE
from endpointkit.generator import ApiFunction, CallShape, Slot, apply_transformers
from endpointkit.models import ClientConfig, ResponseValidationMode
from endpointkit.output import debug, error, get_output


def _read_json_option(option: str, raw: Optional[str]) -> Any:
    """Parse a JSON option value; ``@path`` reads the JSON from a file."""
    if raw is None:
        return None
    if raw.startswith("@"):
        file_path = Path(raw[1:])
        if not file_path.is_file():
            error(f"{option} file not found: {file_path}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        raw = file_path.read_text(encoding="utf-8")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        error(f"{option} is not valid JSON: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None


def build_arguments(name: str, endpoint: Endpoint, supplied: dict[Slot, Any]) -> list[Any]:
    """Order the supplied slot values by the endpoint's call shape.

    An omitted query defaults to ``{}``; omitted path parameters and bodies
    are an error, as is a value for a slot the endpoint does not take.
    """
    shape = CallShape.of(endpoint)
    options = {Slot.PATH: "--path", Slot.QUERY: "--query", Slot.BODY: "--body"}

    unexpected = [options[slot] for slot, value in supplied.items() if value is not None and slot not in shape.slots]
    if unexpected:
        error(f"{name} does not take {', '.join(unexpected)} (signature: {name}{shape.signature()})")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    arguments: list[Any] = []
    for slot in shape.slots:
        value = supplied.get(slot)
        if value is None:
            if slot is not Slot.QUERY:
                error(f"{name} requires {options[slot]}")
                raise typer.Exit(code=EXIT_INVALID_USAGE)
            value = {}
        arguments.append(value)
    return arguments


async def _invoke(
    name: str,
    endpoint: Endpoint,
    config: ClientConfig,
    arguments: list[Any],
    response_mode: ResponseValidationMode,
    check_status: bool,
) -> ApiResponse:
    transformers = [log_exchanges()]
    if check_status:
        transformers.append(raise_for_status)
    client = apply_transformers(build_client(config), transformers)
    try:
        function = ApiFunction(endpoint, client, name=name, response_mode=response_mode)
        return await function(*arguments)
    finally:
        await client.aclose()


def call_command(
    target: str = typer.Argument(..., help="Endpoint table as module:attribute."),
    name: str = typer.Argument(..., help="Name of the endpoint to call."),
    path: Optional[str] = typer.Option(None, "--path", help="Path parameters as JSON (or @file)."),
    query: Optional[str] = typer.Option(None, "--query", help="Query parameters as JSON (or @file)."),
    body: Optional[str] = typer.Option(None, "--body", help="Request body as JSON (or @file)."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the base URL."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds."),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Client config file (YAML or JSON)."
    ),
    safe: bool = typer.Option(
        False, "--safe", help="Print null data instead of failing when the response breaks its schema."
    ),
    check_status: bool = typer.Option(
        True, "--check-status/--no-check-status", help="Fail on 4xx/5xx responses."
    ),
) -> None:
    """Call one endpoint and print its response.

    Example::

        endpointkit call myapp.api:FRUIT_API find_by_id --path '{"id": "1"}'
        endpointkit call myapp.api:FRUIT_API find --query '{"limit": 5}'
    """
    endpoints = load_table_or_exit(target)
    if name not in endpoints:
        error(f"{target} has no endpoint named {name!r}. Available: {', '.join(endpoints)}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    endpoint = endpoints[name]

    arguments = build_arguments(
        name,
        endpoint,
        {
            Slot.PATH: _read_json_option("--path", path),
            Slot.QUERY: _read_json_option("--query", query),
            Slot.BODY: _read_json_option("--body", body),
        },
    )
    mode = ResponseValidationMode.SAFE if safe else ResponseValidationMode.STRICT

    try:
        config = resolve_client_config(base_url, timeout, config_path)
        debug(f"{endpoint} against {config.base_url or '<no base url>'}")
        response = asyncio.run(_invoke(name, endpoint, config, arguments, mode, check_status))
    except ResponseValidationError as exc:
        error(str(exc))
        debug(f"Raw response data: {exc.data!r}")
        raise typer.Exit(code=exc.exit_code) from None
    except EndpointKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except httpx.HTTPStatusError as exc:
        error(f"HTTP {exc.response.status_code} from {exc.request.method} {exc.request.url}")
        raise typer.Exit(code=EXIT_HTTP_STATUS) from None
    except httpx.HTTPError as exc:
        error(f"Request failed: {exc}")
        raise typer.Exit(code=EXIT_CONNECTION_ERROR) from None

    get_output().show_response(response)
