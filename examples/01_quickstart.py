#!/usr/bin/env python3
"""Example: Quickstart — layered-dispatch

Minimal working example: declare a model, override one of its methods
from a second "extension", delegate to the original with super(), and
call a helper method that re-enters the overridden one.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install layered-dispatch
"""
from __future__ import annotations

import layered


def base_extension(registry: layered.ModelRegistry) -> None:
    partner = registry.model("Partner")

    @partner.method
    def greet(rec, name):
        return f"Hello {name}"

    @partner.method
    def introduce(rec):
        # calls whatever greet layer is on top
        return rec.greet(rec.payload["name"]) + "."


def polite_extension(registry: layered.ModelRegistry) -> None:
    partner = registry.model("Partner")

    @partner.method("greet")
    def greet(rec, name):
        return rec.super().greet(name) + ", pleased to meet you"


def main() -> None:
    print(f"layered-dispatch version: {layered.__version__}")

    registry = layered.ModelRegistry()
    registry.load_extension(base_extension)
    registry.load_extension(polite_extension)
    registry.freeze()

    rec = registry.get("Partner").new_record({"name": "Ada"})
    print(rec.greet("Grace"))
    print(rec.introduce())

    chain = registry.get("Partner").methods.get("greet")
    print(f"greet{layered.method_type(rec, 'greet')} has {len(chain)} layers:")
    for layer in chain.layers:
        print(f"  [{layer.position}] {layer.qualname}")

    try:
        rec.super()
    except layered.EmptyCallStackError as exc:
        print(f"As expected: {exc}")


if __name__ == "__main__":
    main()
