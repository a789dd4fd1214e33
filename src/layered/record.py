"""Records: the handle methods are called on.

A ``Record`` pairs a model with an opaque payload and the call stack of
the call tree it is travelling through. The dispatcher never inspects the
payload; it only copies the record and attaches a new stack to the copy.

Methods can be called by name or as attributes::

    rec = partner.new_record({"name": "Ada"})
    rec.call("greet", "hello")
    rec.greet("hello")

and from inside a layer, ``rec.super().greet("hello")`` runs the parent
layer of the method currently executing.
"""
from __future__ import annotations

import functools
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from layered.dispatch.dispatcher import call, call_multi, super_
from layered.dispatch.stack import EMPTY_STACK, CallStack

if TYPE_CHECKING:
    from layered.registry.models import Model


@dataclass(frozen=True, eq=False)
class Record:
    """Immutable handle carrying a model, a payload and a call stack.

    Attribute access only dispatches names that are not already attributes
    of ``Record``. Methods named ``call``, ``call_multi``, ``super``,
    ``with_stack``, ``model``, ``payload`` or ``call_stack``, and names
    starting with an underscore, must be called by name instead::

        rec.call("super")
    """

    model: Model
    payload: Any = None
    call_stack: CallStack = field(default=EMPTY_STACK, repr=False)

    def with_stack(self, call_stack: CallStack) -> Record:
        """Return a copy of this record travelling with ``call_stack``."""
        return replace(self, call_stack=call_stack)

    def call(self, method_name: str, *args: Any, **kwargs: Any) -> Any:
        """Call a method and return its first result (``None`` if none)."""
        return call(self, method_name, *args, **kwargs)

    def call_multi(self, method_name: str, *args: Any, **kwargs: Any) -> list[Any]:
        """Call a method and return all of its results."""
        return call_multi(self, method_name, *args, **kwargs)

    def super(self) -> Record:
        """Return a record on which the running method calls its parent layer."""
        return super_(self)

    def __getattr__(self, name: str) -> Any:
        # only reached for missing attributes; guard the fields themselves
        # so a half-built record (e.g. during copy) cannot recurse
        if name.startswith("_") or name in ("model", "payload", "call_stack"):
            raise AttributeError(name)
        if name not in self.model.methods:
            raise AttributeError(
                f"{type(self).__name__} of model {self.model.name!r} "
                f"has no attribute or method {name!r}"
            )
        return functools.partial(call, self, name)
