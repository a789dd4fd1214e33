"""Shared test fixtures for layered-dispatch.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from layered.registry.models import Model, ModelRegistry


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "layered"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def registry() -> ModelRegistry:
    """Return a fresh, empty model registry."""
    return ModelRegistry("test")


@pytest.fixture()
def calls() -> list[str]:
    """Invocation log shared by the layers of ``partner``."""
    return []


@pytest.fixture()
def partner(registry: ModelRegistry, calls: list[str]) -> Model:
    """A ``Partner`` model whose ``greet`` has three layers L1 < L2 < L3.

    Each layer appends its name to ``calls``. L3 and L2 delegate to their
    parent; L1 is the base and returns the greeting.
    """
    model = registry.model("Partner")

    @model.method("greet")
    def greet_l1(rec, name):
        calls.append("L1")
        return f"hello {name}"

    @model.method("greet")
    def greet_l2(rec, name):
        calls.append("L2")
        return rec.super().greet(name) + "!"

    @model.method("greet")
    def greet_l3(rec, name):
        calls.append("L3")
        return rec.super().greet(name).capitalize()

    return model
