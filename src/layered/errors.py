"""Error types raised by the dispatch engine.

Every error here signals a programming mistake in a registered layer or
in the code calling it, never a transient condition. They are raised at
the point of misuse and carry the model and method names so that the
offending registration can be found quickly.
"""
from __future__ import annotations


class DispatchError(Exception):
    """Base class for all layered-dispatch errors.

    Parameters
    ----------
    message:
        Human-readable description of the misuse.
    model_name:
        Name of the model the failing call was made on.
    method_name:
        Name of the method involved, if any.
    """

    def __init__(
        self, message: str, model_name: str, method_name: str | None = None
    ) -> None:
        self.model_name = model_name
        self.method_name = method_name
        super().__init__(message)


class UnknownMethodError(DispatchError, KeyError):
    """Raised when a method name has no registered chain on a model."""

    def __init__(self, method_name: str, model_name: str) -> None:
        super().__init__(
            f"Unknown method {method_name!r} in model {model_name!r}. "
            "Register at least one layer for it before calling it.",
            model_name,
            method_name,
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class UnknownModelError(DispatchError, KeyError):
    """Raised when a model name is not known to a ``ModelRegistry``."""

    def __init__(self, model_name: str, registry_name: str) -> None:
        self.registry_name = registry_name
        super().__init__(
            f"Unknown model {model_name!r} in registry {registry_name!r}.",
            model_name,
        )

    def __str__(self) -> str:
        return str(self.args[0])


class EmptyCallStackError(DispatchError, RuntimeError):
    """Raised when ``super`` is requested outside of any running layer."""

    def __init__(self, model_name: str) -> None:
        super().__init__(
            f"Empty call stack on model {model_name!r}: super() can only be "
            "used from inside a method layer invoked through the dispatcher.",
            model_name,
        )


class NoParentLayerError(DispatchError, RuntimeError):
    """Raised when ``super`` is requested from the base layer of a chain."""

    def __init__(self, model_name: str, method_name: str) -> None:
        super().__init__(
            f"Called super() on the base layer of {model_name}.{method_name}: "
            "there is no parent layer to delegate to.",
            model_name,
            method_name,
        )


class RegistrationClosedError(DispatchError, RuntimeError):
    """Raised when registering into a frozen ``ModelRegistry``."""

    def __init__(self, model_name: str, method_name: str | None = None) -> None:
        target = f"{model_name}.{method_name}" if method_name else model_name
        super().__init__(
            f"Cannot register {target!r}: the model registry is frozen.",
            model_name,
            method_name,
        )
