"""``endpointkit inspect`` -- show the functions an endpoint table generates.

Loads a ``module:attribute`` endpoint table and prints, for every entry,
the HTTP method, URL template, the call signature of its generated
function, the response schema and the response validation mode. Entries
that could not be generated are reported and make the command exit with
:data:`~endpointkit.exit_codes.EXIT_INVALID_USAGE`.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from endpointkit.commands import load_table_or_exit
from endpointkit.endpoint import Endpoint
from endpointkit.exceptions import DescriptorError
from endpointkit.exit_codes import EXIT_INVALID_USAGE
from endpointkit.generator import CallShape, check_endpoint
from endpointkit.models import ResponseValidationMode
from endpointkit.output import error, get_output


def describe_schema(validator: Optional[Any]) -> str:
    """Short display name for the schema behind *validator*."""
    if validator is None:
        return "-"
    schema = getattr(validator, "schema", validator)
    if isinstance(schema, type):
        return schema.__name__
    return repr(schema)


def endpoint_row(name: str, endpoint: Endpoint, default_mode: ResponseValidationMode) -> dict[str, str]:
    signature = CallShape.of(endpoint).signature()
    mode = endpoint.response_mode or default_mode
    return {
        "Name": name,
        "Method": endpoint.method.value,
        "URL": endpoint.url,
        "Signature": f"{name}{signature}",
        "Response": describe_schema(endpoint.response),
        "Mode": mode.value if endpoint.response is not None else "-",
    }


def inspect_command(
    target: str = typer.Argument(..., help="Endpoint table as module:attribute."),
    safe: bool = typer.Option(
        False, "--safe", help="Show response modes as if generated with safe validation."
    ),
) -> None:
    """List the functions generated from an endpoint table.

    Example::

        endpointkit inspect myapp.api:FRUIT_API
        endpointkit --json inspect myapp.api:FRUIT_API
    """
    endpoints = load_table_or_exit(target)
    default_mode = ResponseValidationMode.SAFE if safe else ResponseValidationMode.STRICT

    rows: list[dict[str, str]] = []
    problems: list[str] = []
    for name, endpoint in endpoints.items():
        try:
            check_endpoint(endpoint)
        except DescriptorError as exc:
            problems.append(f"{name}: {exc}")
            continue
        rows.append(endpoint_row(name, endpoint, default_mode))

    get_output().show_rows(rows, title=f"{target} -- Endpoints ({len(rows)})")

    for problem in problems:
        error(problem)
    if problems:
        raise typer.Exit(code=EXIT_INVALID_USAGE)
