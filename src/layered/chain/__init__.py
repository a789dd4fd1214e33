"""Method chains and their layers."""
from __future__ import annotations

from layered.chain.chain import LayerFunc, MethodChain, MethodLayer

__all__ = ["LayerFunc", "MethodChain", "MethodLayer"]
