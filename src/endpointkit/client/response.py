"""Response envelope returned by every generated function.

Generated functions never hand back a bare payload. They return an
:class:`ApiResponse` carrying the status code, the headers, the final
``data`` (validated when the endpoint declares a response schema) and the
underlying :class:`httpx.Response` for anything else a caller may need.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

import httpx


@dataclass(frozen=True)
class ApiResponse:
    """Status, headers and payload of one completed call.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers (case-insensitive).
        data: Decoded payload, or the validator's output when the endpoint
            declares a response schema.
        response: The raw :class:`httpx.Response`.
    """

    status_code: int
    headers: httpx.Headers
    data: Any
    response: httpx.Response

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> ApiResponse:
        """Wrap *response*, decoding its body with :func:`extract_response_data`."""
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            data=extract_response_data(response),
            response=response,
        )

    def with_data(self, data: Any) -> ApiResponse:
        """Return a copy of this envelope carrying *data*."""
        return replace(self, data=data)

    @property
    def is_success(self) -> bool:
        return self.response.is_success


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first.  If that fails (e.g. the
    response is HTML or plain text), returns the raw text.  Returns
    ``None`` for responses with no content.

    Args:
        response: The :class:`httpx.Response` to extract data from.

    Returns:
        A JSON-decoded object (``dict``, ``list``, etc.), a ``str`` of raw
        text, or ``None`` if the body is empty.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        return response.text
