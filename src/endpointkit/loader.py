"""Locate an endpoint table from a ``module:attribute`` reference.

The command line refers to endpoint tables the way ASGI servers refer to
applications::

    endpointkit inspect myapp.api:FRUIT_API

:func:`load_endpoint_table` imports ``myapp.api``, reads ``FRUIT_API`` and
checks that it maps names to :class:`~endpointkit.endpoint.Endpoint`
descriptors. Dotted attributes (``module:Namespace.TABLE``) are followed.
"""

from __future__ import annotations

import importlib
from typing import Mapping

from endpointkit.endpoint import Endpoint
from endpointkit.exceptions import ConfigError


def load_endpoint_table(target: str) -> Mapping[str, Endpoint]:
    """Import and return the endpoint table named by *target*.

    Args:
        target: ``package.module:ATTRIBUTE``.

    Raises:
        ConfigError: If *target* is malformed, the module cannot be
            imported, the attribute is missing, or it is not a mapping of
            :class:`~endpointkit.endpoint.Endpoint` values.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(f"Expected 'module:attribute', got {target!r}")

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import {module_name!r}: {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ConfigError(f"{module_name!r} has no attribute {attr_path!r}") from None

    if not isinstance(obj, Mapping):
        raise ConfigError(f"{target} is a {type(obj).__name__}, not a mapping of endpoints")

    bad = [str(name) for name, value in obj.items() if not isinstance(value, Endpoint)]
    if bad:
        raise ConfigError(f"{target}: entries are not Endpoint descriptors: {', '.join(bad)}")
    return obj
