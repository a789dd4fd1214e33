"""The dispatcher: run a method on a record through its layer chain.

``call_multi`` is the single entry point every invocation goes through.
It looks for a frame already tracking the method in the record's call
stack. When there is one, the call is a re-entry into a method that is
already running somewhere up the call tree and it continues at that
frame's layer instead of starting again from the top. Otherwise a fresh
frame on the chain's top layer is pushed, on a copy of the record, so the
caller's own stack is left as it was.

``super_`` moves the front frame one layer down the chain. Calling the
same method on the returned record then runs the parent layer::

    @partner.method("greet")
    def greet(rec, name):
        return super_(rec).call("greet", name) + "!"
"""
from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from layered.errors import EmptyCallStackError, NoParentLayerError

if TYPE_CHECKING:
    from layered.chain.chain import MethodLayer
    from layered.record import Record
    from layered.registry.models import Model

logger = logging.getLogger(__name__)


def _as_results(value: Any) -> list[Any]:
    """Normalize an implementation's return value to a result list.

    ``None`` means no results, a tuple holds several results, and anything
    else is a single result.
    """
    if value is None:
        return []
    if isinstance(value, tuple):
        return list(value)
    return [value]


def call_multi(record: Record, method_name: str, *args: Any, **kwargs: Any) -> list[Any]:
    """Call ``method_name`` on ``record`` and return every result.

    Parameters
    ----------
    record:
        The record to call the method on. Its call stack decides which
        layer runs.
    method_name:
        Name of the method to call.
    *args, **kwargs:
        Passed to the layer after the record.

    Returns
    -------
    list[Any]
        The normalized results, possibly empty.

    Raises
    ------
    layered.errors.UnknownMethodError
        If the record's model has no such method.
    """
    model = record.model
    chain = model.methods.get(method_name)
    frame = record.call_stack.find(chain)
    if frame is not None:
        layer = frame.layer
        logger.debug(
            "Re-entering %s.%s at layer %d", model.name, method_name, layer.position
        )
    else:
        layer = chain.top
        record = record.with_stack(record.call_stack.push(layer))
        logger.debug(
            "Entering %s.%s at top layer %d", model.name, method_name, layer.position
        )
    return _invoke(layer, record, args, kwargs)


def call(record: Record, method_name: str, *args: Any, **kwargs: Any) -> Any:
    """Call ``method_name`` on ``record`` and return its first result.

    Returns ``None`` when the implementation produced no result.
    """
    results = call_multi(record, method_name, *args, **kwargs)
    if not results:
        return None
    return results[0]


def super_(record: Record) -> Record:
    """Return a copy of ``record`` whose current method runs its parent layer.

    Raises
    ------
    layered.errors.EmptyCallStackError
        If no method is running on ``record``.
    layered.errors.NoParentLayerError
        If the running layer is already the base of its chain.
    """
    frame = record.call_stack.front
    if frame is None:
        logger.error("Empty call stack on model %r", record.model.name)
        raise EmptyCallStackError(record.model.name)
    parent = frame.layer.parent
    if parent is None:
        logger.error(
            "Called super() on a base method: %s.%s",
            record.model.name,
            frame.chain.name,
        )
        raise NoParentLayerError(record.model.name, frame.chain.name)
    return record.with_stack(record.call_stack.advance(parent))


def method_type(target: Record | Model, method_name: str) -> inspect.Signature:
    """Return the signature callers must use for ``method_name``.

    The signature is taken from the most specific layer and excludes the
    leading record parameter.
    """
    model = getattr(target, "model", target)
    return model.methods.get(method_name).signature()


def check_arguments(
    target: Record | Model, method_name: str, *args: Any, **kwargs: Any
) -> inspect.BoundArguments:
    """Bind arguments against ``method_name``'s signature.

    Raises
    ------
    TypeError
        If the arguments do not fit the signature.
    """
    sig = method_type(target, method_name)
    try:
        return sig.bind(*args, **kwargs)
    except TypeError as exc:
        model = getattr(target, "model", target)
        raise TypeError(f"{model.name}.{method_name}{sig}: {exc}") from exc


def _invoke(layer: MethodLayer, record: Record, args: tuple, kwargs: dict) -> list[Any]:
    return _as_results(layer.func(record, *args, **kwargs))
