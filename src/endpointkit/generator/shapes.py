"""Call shapes -- the positional signature of a generated function.

Which schemas an :class:`~endpointkit.endpoint.Endpoint` declares fixes the
arguments its function accepts. Arguments always come in the order path
parameters, query, body, and a slot is simply absent when its schema is:

=================  ==================================
Shape              Signature
=================  ==================================
``NONE``           ``()``
``PATH``           ``(path_params)``
``QUERY``          ``(query)``
``BODY``           ``(body)``
``PATH_QUERY``     ``(path_params, query)``
``PATH_BODY``      ``(path_params, body)``
``QUERY_BODY``     ``(query, body)``
``PATH_QUERY_BODY`` ``(path_params, query, body)``
=================  ==================================

The shape is resolved once, when the function is generated, and never
changes afterwards.
"""

from __future__ import annotations

import enum
import inspect

from endpointkit.endpoint import Endpoint


class Slot(str, enum.Enum):
    """A positional argument of a generated function, named after its parameter."""

    PATH = "path_params"
    QUERY = "query"
    BODY = "body"


class CallShape(enum.Enum):
    """The eight possible argument layouts of a generated function."""

    NONE = ()
    PATH = (Slot.PATH,)
    QUERY = (Slot.QUERY,)
    BODY = (Slot.BODY,)
    PATH_QUERY = (Slot.PATH, Slot.QUERY)
    PATH_BODY = (Slot.PATH, Slot.BODY)
    QUERY_BODY = (Slot.QUERY, Slot.BODY)
    PATH_QUERY_BODY = (Slot.PATH, Slot.QUERY, Slot.BODY)

    @classmethod
    def of(cls, endpoint: Endpoint) -> CallShape:
        """Resolve the shape implied by the schemas *endpoint* declares."""
        present = {
            Slot.PATH: endpoint.path_params is not None,
            Slot.QUERY: endpoint.query is not None,
            Slot.BODY: endpoint.body is not None,
        }
        return cls(tuple(slot for slot in Slot if present[slot]))

    @property
    def slots(self) -> tuple[Slot, ...]:
        return self.value

    @property
    def arity(self) -> int:
        return len(self.value)

    def signature(self) -> inspect.Signature:
        """Build the :class:`inspect.Signature` calls are bound against."""
        return inspect.Signature(
            [
                inspect.Parameter(slot.value, inspect.Parameter.POSITIONAL_OR_KEYWORD)
                for slot in self.slots
            ]
        )
