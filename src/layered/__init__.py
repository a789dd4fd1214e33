"""layered-dispatch — layered method overrides without inheritance.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import layered

    registry = layered.ModelRegistry()
    partner = registry.model("Partner")

    @partner.method
    def greet(rec, name):
        return f"Hello {name}"

    # a later extension overrides greet and delegates to the original
    @partner.method("greet")
    def greet_loudly(rec, name):
        return rec.super().greet(name).upper()

    rec = partner.new_record()
    layered.call(rec, "greet", "Ada")
    'HELLO ADA'

    layered.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from layered.chain import MethodChain, MethodLayer
from layered.config import ConfigError, DispatchConfig, bootstrap, load_config
from layered.dispatch import (
    CallStack,
    Frame,
    call,
    call_multi,
    check_arguments,
    method_type,
    super_,
)
from layered.errors import (
    DispatchError,
    EmptyCallStackError,
    NoParentLayerError,
    RegistrationClosedError,
    UnknownMethodError,
    UnknownModelError,
)
from layered.record import Record
from layered.registry import MethodRegistry, Model, ModelRegistry

__all__ = [
    "__version__",
    "CallStack",
    "ConfigError",
    "DispatchConfig",
    "DispatchError",
    "EmptyCallStackError",
    "Frame",
    "MethodChain",
    "MethodLayer",
    "MethodRegistry",
    "Model",
    "ModelRegistry",
    "NoParentLayerError",
    "Record",
    "RegistrationClosedError",
    "UnknownMethodError",
    "UnknownModelError",
    "bootstrap",
    "call",
    "call_multi",
    "check_arguments",
    "load_config",
    "method_type",
    "super_",
]
