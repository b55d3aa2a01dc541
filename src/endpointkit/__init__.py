"""endpointkit -- declare HTTP endpoints once, call them as validated async functions.

An endpoint table maps names to :class:`Endpoint` descriptors: a method, a
URL template and optional pydantic schemas for path parameters, query,
body and response. :func:`init_api_functions` turns the table into
awaitable functions that validate their arguments, fill in the URL, send
one request through a shared :class:`httpx.AsyncClient` and validate the
response::

    from pydantic import BaseModel
    from endpointkit import Endpoint, init_api_functions

    class Fruit(BaseModel):
        id: str
        name: str

    class IdPath(BaseModel):
        id: str

    FRUIT_API = {
        "find_by_id": Endpoint("GET", "/fruit/:id", path_params=IdPath, response=Fruit),
    }

    apis = init_api_functions(FRUIT_API, {"base_url": "https://api.example.com"})
    response = await apis.find_by_id({"id": "1"})
    response.status_code, response.data.name

Modules:
    endpoint: The :class:`Endpoint` descriptor.
    generator: Function factory, batch initializer, URL templating.
    validation: The validator capability and its pydantic implementation.
    client: Transport construction, response envelope, transformers.
    config: Client configuration from files and the environment.
    exceptions: Exception hierarchy with exit-code mapping.
    app: The ``endpointkit`` developer command line.
"""

from endpointkit.client.response import ApiResponse
from endpointkit.endpoint import Endpoint
from endpointkit.exceptions import (
    ConfigError,
    DescriptorError,
    EndpointKitError,
    FieldError,
    MissingPathParameterError,
    ResponseValidationError,
    TransportError,
    ValidationError,
)
from endpointkit.generator import (
    ApiFunction,
    ApiFunctions,
    CallShape,
    create_api_function,
    init_api_functions,
)
from endpointkit.models import ClientConfig, HTTPMethod, MethodCapabilities, ResponseValidationMode
from endpointkit.validation import BaseValidator, SchemaValidator, ValidationResult, Validator

__version__ = "0.1.0"

__all__ = [
    "ApiFunction",
    "ApiFunctions",
    "ApiResponse",
    "BaseValidator",
    "CallShape",
    "ClientConfig",
    "ConfigError",
    "DescriptorError",
    "Endpoint",
    "EndpointKitError",
    "FieldError",
    "HTTPMethod",
    "MethodCapabilities",
    "MissingPathParameterError",
    "ResponseValidationError",
    "ResponseValidationMode",
    "SchemaValidator",
    "TransportError",
    "ValidationError",
    "ValidationResult",
    "Validator",
    "create_api_function",
    "init_api_functions",
]
