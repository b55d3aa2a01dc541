"""Numeric process exit codes used by the ``endpointkit`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~endpointkit.exceptions.EndpointKitError` subclass.
Scripts wrapping ``endpointkit call`` can inspect the exit code to tell a
bad argument from an API contract drift or a network outage without
parsing stderr.

Example::

    $ endpointkit call myapp.api:FRUIT find_by_id --path '{"id": 1}'
    $ echo $?
    3   # EXIT_VALIDATION_FAILURE -- the path parameters were rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The endpoint table or the command line arguments are invalid."""

EXIT_VALIDATION_FAILURE = 3
"""Call arguments failed validation or a URL placeholder had no value."""

EXIT_RESPONSE_CONTRACT = 4
"""The response payload did not match the declared response schema."""

EXIT_HTTP_STATUS = 5
"""The transport rejected the response because of its HTTP status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
