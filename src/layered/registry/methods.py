"""Per-model table mapping method names to their chains."""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from layered.chain.chain import LayerFunc, MethodChain, MethodLayer
from layered.errors import RegistrationClosedError, UnknownMethodError

logger = logging.getLogger(__name__)


class MethodRegistry:
    """The methods of one model, each backed by a ``MethodChain``.

    Parameters
    ----------
    model_name:
        Name of the owning model (used in chain identities and errors).
    is_frozen:
        Returns ``True`` once registration is closed. Defaults to never.
    """

    def __init__(
        self, model_name: str, is_frozen: Callable[[], bool] | None = None
    ) -> None:
        self._model_name = model_name
        self._is_frozen = is_frozen or (lambda: False)
        self._chains: dict[str, MethodChain] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, method_name: str, func: LayerFunc) -> MethodLayer:
        """Add ``func`` as the new most specific layer of ``method_name``.

        The chain is created on the first registration. Layers registered
        earlier stay reachable from the new one through ``super``.

        Raises
        ------
        RegistrationClosedError
            If registration has been closed by freezing the owning registry.
        TypeError
            If ``func`` is not callable.
        """
        if not callable(func):
            raise TypeError(
                f"Cannot register {func!r} as {self._model_name}.{method_name}: "
                "layer implementations must be callable."
            )
        with self._lock:
            if self._is_frozen():
                logger.error(
                    "Registration of %s.%s after freeze", self._model_name, method_name
                )
                raise RegistrationClosedError(self._model_name, method_name)
            chain = self._chains.get(method_name)
            if chain is None:
                chain = MethodChain(self._model_name, method_name)
                self._chains[method_name] = chain
            layer = chain.add_layer(func)
        logger.debug(
            "Registered layer %d of %s.%s -> %s",
            layer.position,
            self._model_name,
            method_name,
            layer.qualname,
        )
        return layer

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, method_name: str) -> MethodChain:
        """Return the chain registered for ``method_name``.

        Raises
        ------
        UnknownMethodError
            If no layer was ever registered for ``method_name``.
        """
        try:
            return self._chains[method_name]
        except KeyError:
            logger.error(
                "Unknown method in model: method=%r model=%r",
                method_name,
                self._model_name,
            )
            raise UnknownMethodError(method_name, self._model_name) from None

    def list_methods(self) -> list[str]:
        """Return the registered method names in alphabetical order."""
        return sorted(self._chains)

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._chains

    def __len__(self) -> int:
        return len(self._chains)

    def __repr__(self) -> str:
        return f"MethodRegistry(model={self._model_name!r}, methods={self.list_methods()})"
