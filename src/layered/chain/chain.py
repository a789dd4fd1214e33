"""Method chains: the ordered layers registered for one model method.

A chain is append-only. Layers keep the position they were registered at,
so a call already walking the chain is not disturbed when a new layer is
added on top of it; only calls that start afterwards see the new layer.

Example
-------
::

    chain = MethodChain("Partner", "greet")
    chain.add_layer(base_greet)
    chain.add_layer(polite_greet)

    chain.top is chain.layers[0]          # polite_greet, the newest layer
    chain.top.parent.func is base_greet   # what super() delegates to
"""
from __future__ import annotations

import inspect
import threading
from collections.abc import Callable
from typing import Any

LayerFunc = Callable[..., Any]


class MethodLayer:
    """One implementation contributed to a ``MethodChain``.

    Parameters
    ----------
    chain:
        The chain this layer belongs to.
    func:
        The implementation. It is called with the record as its first
        positional argument, followed by the caller's arguments.
    position:
        Registration index within the chain; ``0`` is the base layer.
    """

    __slots__ = ("chain", "func", "position")

    def __init__(self, chain: MethodChain, func: LayerFunc, position: int) -> None:
        self.chain = chain
        self.func = func
        self.position = position

    @property
    def parent(self) -> MethodLayer | None:
        """The next, less specific layer, or ``None`` for the base layer."""
        if self.position == 0:
            return None
        return self.chain.layer_at(self.position - 1)

    @property
    def is_base(self) -> bool:
        return self.position == 0

    @property
    def qualname(self) -> str:
        module = getattr(self.func, "__module__", None) or "?"
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"{module}.{name}"

    def __repr__(self) -> str:
        return (
            f"MethodLayer({self.chain.model_name}.{self.chain.name}, "
            f"position={self.position}, func={self.qualname})"
        )


class MethodChain:
    """Ordered, append-only sequence of layers for one model method.

    Parameters
    ----------
    model_name:
        Name of the model owning this method.
    name:
        The method name.
    """

    def __init__(self, model_name: str, name: str) -> None:
        self.model_name = model_name
        self.name = name
        self._layers: tuple[MethodLayer, ...] = ()
        self._lock = threading.Lock()

    def add_layer(self, func: LayerFunc) -> MethodLayer:
        """Register ``func`` as the new most specific layer.

        Raises
        ------
        TypeError
            If ``func`` is not callable.
        """
        if not callable(func):
            raise TypeError(
                f"Cannot register {func!r} on {self.model_name}.{self.name}: "
                "layer implementations must be callable."
            )
        with self._lock:
            layer = MethodLayer(self, func, len(self._layers))
            # readers only ever see a complete tuple
            self._layers = self._layers + (layer,)
        return layer

    def layer_at(self, position: int) -> MethodLayer:
        """Return the layer registered at ``position`` (``0`` is the base)."""
        return self._layers[position]

    @property
    def top(self) -> MethodLayer:
        """The most specific layer, reached by an unqualified call.

        Raises
        ------
        LookupError
            If no layer has been registered yet.
        """
        layers = self._layers
        if not layers:
            raise LookupError(f"{self.model_name}.{self.name} has no layers")
        return layers[-1]

    @property
    def base(self) -> MethodLayer:
        """The least specific layer, which has no parent."""
        return self._layers[0]

    @property
    def layers(self) -> list[MethodLayer]:
        """All layers, most specific first and base last."""
        return list(reversed(self._layers))

    def signature(self) -> inspect.Signature:
        """Return the top layer's signature without the leading record parameter."""
        sig = inspect.signature(self.top.func)
        params = list(sig.parameters.values())
        if params and params[0].kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            params = params[1:]
        return sig.replace(parameters=params)

    def __len__(self) -> int:
        return len(self._layers)

    def __repr__(self) -> str:
        return f"MethodChain({self.model_name}.{self.name}, layers={len(self)})"
