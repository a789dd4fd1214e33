"""Dispatch: call stacks and the call/super primitives."""
from __future__ import annotations

from layered.dispatch.dispatcher import (
    call,
    call_multi,
    check_arguments,
    method_type,
    super_,
)
from layered.dispatch.stack import EMPTY_STACK, CallStack, Frame

__all__ = [
    "CallStack",
    "EMPTY_STACK",
    "Frame",
    "call",
    "call_multi",
    "check_arguments",
    "method_type",
    "super_",
]
