"""URL template rendering for path parameters.

A placeholder is a path segment that starts with ``:`` directly after a
``/``. Its name runs up to the next ``/`` or the end of the template::

    /fruit/:id            -> id
    /users/:user/posts/:n -> user, n

:func:`render_path` replaces every placeholder with the percent-encoded
value from a mapping. A placeholder whose value is missing or falsy
(``None``, ``""``, ``0``, ``False``, an empty container) raises
:class:`~endpointkit.exceptions.MissingPathParameterError`; the template
is never returned with literal ``:name`` segments left in it.
"""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import quote

from endpointkit.exceptions import MissingPathParameterError

PLACEHOLDER_RE = re.compile(r"/:([^/]+)")


def placeholders(template: str) -> list[str]:
    """Return placeholder names in the order they appear in *template*.

    Example::

        placeholders("/users/:user/posts/:n")  # ["user", "n"]
    """
    return PLACEHOLDER_RE.findall(template)


def render_path(template: str, values: Mapping[str, Any]) -> str:
    """Substitute the placeholders of *template* with *values*.

    Values are converted with :func:`str` and percent-encoded, including
    ``/``, so a value always stays inside its own segment. Keys of *values*
    that match no placeholder are ignored.

    Args:
        template: URL template such as ``/fruit/:id``.
        values: Mapping of placeholder name to value.

    Returns:
        The rendered URL.

    Raises:
        MissingPathParameterError: If a placeholder has no usable value.

    Example::

        render_path("/fruit/:id", {"id": "42"})  # "/fruit/42"
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value = values.get(name)
        if not value:
            raise MissingPathParameterError(name, template)
        return "/" + quote(str(value), safe="")

    return PLACEHOLDER_RE.sub(_substitute, template)
