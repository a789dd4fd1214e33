"""Models and the registry that owns them.

A ``Model`` is a named kind of record whose methods are assembled from
layers contributed by independent extensions. Extensions are plain
callables taking the ``ModelRegistry``; they can be loaded by dotted
path or discovered through package entry-points under the
"layered.extensions" group.

Example
-------
Register layers with the decorator::

    registry = ModelRegistry()
    partner = registry.model("Partner")

    @partner.method
    def greet(rec, name):
        return f"Hello {name}"

    @partner.method("greet")
    def greet_politely(rec, name):
        return rec.super().greet(name) + ", nice to meet you"

    partner.new_record().greet("Ada")
    'Hello Ada, nice to meet you'

Ship an extension in another distribution's ``pyproject.toml``::

    [project.entry-points."layered.extensions"]
    crm = "crm_addon.models:register"

and load it at startup::

    registry.load_entrypoints()
"""
from __future__ import annotations

import importlib
import importlib.metadata
import logging
import threading
from collections.abc import Callable
from typing import Any, overload

from layered.chain.chain import LayerFunc, MethodLayer
from layered.errors import RegistrationClosedError, UnknownModelError
from layered.record import Record
from layered.registry.methods import MethodRegistry

logger = logging.getLogger(__name__)

DEFAULT_ENTRYPOINT_GROUP = "layered.extensions"

Extension = Callable[["ModelRegistry"], Any]


class Model:
    """A named record kind with layered methods.

    Parameters
    ----------
    name:
        The model name.
    registry:
        The ``ModelRegistry`` this model belongs to, if any. Registration
        is refused once that registry is frozen.
    """

    def __init__(self, name: str, registry: ModelRegistry | None = None) -> None:
        self.name = name
        self._registry = registry
        self.methods = MethodRegistry(
            name, is_frozen=(lambda: registry.frozen) if registry is not None else None
        )

    def register_method(self, method_name: str, func: LayerFunc) -> MethodLayer:
        """Add ``func`` as the most specific layer of ``method_name``.

        Raises
        ------
        RegistrationClosedError
            If the owning registry has been frozen.
        TypeError
            If ``func`` is not callable.
        """
        return self.methods.register(method_name, func)

    @overload
    def method(self, name_or_func: LayerFunc) -> LayerFunc: ...

    @overload
    def method(self, name_or_func: str) -> Callable[[LayerFunc], LayerFunc]: ...

    def method(self, name_or_func):
        """Decorator registering a layer, named after the function or explicitly.

        ::

            @model.method
            def compute(rec): ...

            @model.method("compute")
            def compute_cached(rec): ...

        The decorated function is returned unchanged.
        """
        if callable(name_or_func):
            self.register_method(name_or_func.__name__, name_or_func)
            return name_or_func

        def decorator(func: LayerFunc) -> LayerFunc:
            self.register_method(name_or_func, func)
            return func

        return decorator

    def new_record(self, payload: Any = None) -> Record:
        """Return a record of this model with an empty call stack."""
        return Record(self, payload)

    def __repr__(self) -> str:
        return f"Model({self.name!r}, methods={self.methods.list_methods()})"


class ModelRegistry:
    """Process-level table of models, built during a startup phase.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in error messages).
    """

    def __init__(self, name: str = "default") -> None:
        self._name = name
        self._models: dict[str, Model] = {}
        self._loaded: set[str] = set()
        self._frozen = False
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    def model(self, name: str) -> Model:
        """Return the model called ``name``, creating it if needed.

        Raises
        ------
        RegistrationClosedError
            If the model does not exist yet and the registry is frozen.
        """
        with self._lock:
            existing = self._models.get(name)
            if existing is not None:
                return existing
            if self._frozen:
                logger.error("Model %r created after freeze", name)
                raise RegistrationClosedError(name)
            model = Model(name, self)
            self._models[name] = model
        logger.debug("Created model %r in registry %r", name, self._name)
        return model

    def get(self, name: str) -> Model:
        """Return the existing model called ``name``.

        Raises
        ------
        UnknownModelError
            If no such model was created.
        """
        try:
            return self._models[name]
        except KeyError:
            logger.error("Unknown model %r in registry %r", name, self._name)
            raise UnknownModelError(name, self._name) from None

    def list_models(self) -> list[str]:
        """Return model names in alphabetical order."""
        return sorted(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self) -> str:
        return f"ModelRegistry(name={self._name!r}, models={self.list_models()})"

    # ------------------------------------------------------------------
    # Startup phase
    # ------------------------------------------------------------------

    def freeze(self) -> None:
        """Close the registration phase; dispatch is unaffected."""
        self._frozen = True
        logger.debug("Registry %r frozen with %d model(s)", self._name, len(self))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def load_extension(self, target: str | Extension) -> None:
        """Run one extension against this registry.

        Parameters
        ----------
        target:
            A callable taking the registry, a ``"package.module:attr"``
            reference to one, or a dotted module path whose ``register``
            function is used.

        Raises
        ------
        ImportError
            If the module cannot be imported.
        AttributeError
            If the module has no ``register`` function (or no ``attr``).
        TypeError
            If the resolved object is not callable.
        """
        func = _resolve_extension(target) if isinstance(target, str) else target
        if not callable(func):
            raise TypeError(f"Extension {target!r} is not callable.")
        func(self)
        logger.debug("Loaded extension %r into registry %r", target, self._name)

    def load_entrypoints(self, group: str = DEFAULT_ENTRYPOINT_GROUP) -> None:
        """Discover and run extensions declared as package entry-points.

        Entry-points are loaded sorted by name so that priority between
        them is stable. Names already loaded by a previous call are
        skipped, which makes repeated calls idempotent. An entry-point
        that fails to import is logged and skipped.
        """
        entry_points = sorted(
            importlib.metadata.entry_points(group=group), key=lambda ep: ep.name
        )
        for ep in entry_points:
            if ep.name in self._loaded:
                logger.debug(
                    "Entry-point %r already loaded into %r; skipping.",
                    ep.name,
                    self._name,
                )
                continue
            try:
                func = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            self.load_extension(func)
            self._loaded.add(ep.name)


def _resolve_extension(path: str) -> Extension:
    module_name, _, attr = path.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attr or "register")
