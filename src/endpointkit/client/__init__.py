"""Transport layer shared by all generated functions.

Provides the pieces the generator needs around :mod:`httpx`:

* :func:`build_client` -- construct the shared :class:`httpx.AsyncClient`
  from a :class:`~endpointkit.models.ClientConfig`.
* :class:`ApiResponse` -- the envelope returned by generated functions.
* :mod:`~endpointkit.client.transformers` -- callables that augment a
  freshly built client (status checks, default headers, request logging).

Retries, caching and connection policy are left to httpx and to the
transformers the caller chooses.
"""

from endpointkit.client.response import ApiResponse, extract_response_data
from endpointkit.client.transformers import log_exchanges, raise_for_status, with_headers
from endpointkit.client.transport import build_client, coerce_client_config, is_transport_handle

__all__ = [
    "ApiResponse",
    "build_client",
    "coerce_client_config",
    "extract_response_data",
    "is_transport_handle",
    "log_exchanges",
    "raise_for_status",
    "with_headers",
]
