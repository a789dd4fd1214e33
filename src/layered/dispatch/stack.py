"""Call stacks: which layer each in-progress method is currently running.

A ``CallStack`` is an immutable, singly linked list of ``Frame`` objects,
most recently entered first. ``push`` and ``advance`` return new stacks
that share the untouched tail with the original, so a nested call can
never change what its caller sees.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from layered.chain.chain import MethodChain, MethodLayer


@dataclass(frozen=True)
class Frame:
    """Marks the layer currently executing for one method of a call tree."""

    layer: MethodLayer

    @property
    def chain(self) -> MethodChain:
        return self.layer.chain


@dataclass(frozen=True)
class _Node:
    frame: Frame
    next: _Node | None


class CallStack:
    """Persistent stack of active frames, at most one per method chain."""

    __slots__ = ("_head", "_depth")

    def __init__(self, _head: _Node | None = None, _depth: int = 0) -> None:
        self._head = _head
        self._depth = _depth

    @property
    def front(self) -> Frame | None:
        """The most recently entered frame, or ``None`` if the stack is empty."""
        return self._head.frame if self._head is not None else None

    def find(self, chain: MethodChain) -> Frame | None:
        """Return the live frame for ``chain``, or ``None``."""
        for frame in self:
            if frame.chain is chain:
                return frame
        return None

    def push(self, layer: MethodLayer) -> CallStack:
        """Return a new stack with a frame for ``layer`` in front."""
        return CallStack(_Node(Frame(layer), self._head), self._depth + 1)

    def advance(self, layer: MethodLayer) -> CallStack:
        """Return a new stack whose front frame points at ``layer``.

        The frames below the front are shared with this stack.
        """
        if self._head is None:
            raise IndexError("cannot advance an empty call stack")
        return CallStack(_Node(Frame(layer), self._head.next), self._depth)

    def __iter__(self) -> Iterator[Frame]:
        node = self._head
        while node is not None:
            yield node.frame
            node = node.next

    def __len__(self) -> int:
        return self._depth

    def __bool__(self) -> bool:
        return self._head is not None

    def __repr__(self) -> str:
        entries = ", ".join(
            f"{f.chain.name}@{f.layer.position}" for f in self
        )
        return f"CallStack([{entries}])"


EMPTY_STACK = CallStack()
