"""Sub-commands of the ``endpointkit`` command line.

* :mod:`~endpointkit.commands.inspect` -- list the functions an endpoint
  table generates, with their call signatures.
* :mod:`~endpointkit.commands.call` -- invoke one generated function and
  print the response.

Both take the endpoint table as a ``module:attribute`` reference, resolved
by :func:`load_table_or_exit`.
"""

from __future__ import annotations

from typing import Mapping

import typer

from endpointkit.endpoint import Endpoint
from endpointkit.exceptions import EndpointKitError
from endpointkit.loader import load_endpoint_table
from endpointkit.output import error


def load_table_or_exit(target: str) -> Mapping[str, Endpoint]:
    """Load the endpoint table *target*, exiting with its error code on failure."""
    try:
        return load_endpoint_table(target)
    except EndpointKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
