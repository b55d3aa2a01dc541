"""Function generator -- turn endpoint descriptors into awaitable callables.

Typical usage::

    from endpointkit.generator import init_api_functions

    apis = init_api_functions(FRUIT_API, {"base_url": "https://api.example.com"})
    response = await apis.find_by_id({"id": "1"})

Sub-modules:

* :mod:`~endpointkit.generator.templating` -- Render ``/:name`` URL
  placeholders from validated path parameters.
* :mod:`~endpointkit.generator.shapes` -- The fixed positional signature
  implied by the schemas an endpoint declares.
* :mod:`~endpointkit.generator.factory` -- Generate the function for one
  endpoint and run its validate/request/validate pipeline.
* :mod:`~endpointkit.generator.initializer` -- Generate a whole table of
  functions sharing one transport handle.
"""

from endpointkit.generator.factory import ApiFunction, check_endpoint, create_api_function
from endpointkit.generator.initializer import ApiFunctions, apply_transformers, init_api_functions
from endpointkit.generator.shapes import CallShape, Slot
from endpointkit.generator.templating import placeholders, render_path

__all__ = [
    "ApiFunction",
    "ApiFunctions",
    "CallShape",
    "Slot",
    "apply_transformers",
    "check_endpoint",
    "create_api_function",
    "init_api_functions",
    "placeholders",
    "render_path",
]
