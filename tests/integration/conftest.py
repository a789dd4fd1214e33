"""Fixtures writing real extension modules and configurations to disk."""
from __future__ import annotations

import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest

BASE_EXTENSION = '''
def register(registry):
    partner = registry.model("Partner")

    @partner.method
    def greet(rec, name):
        return "Hello " + name

    @partner.method
    def display_name(rec):
        return rec.greet("partner")

    @partner.method
    def nothing(rec):
        return None
'''

SALES_EXTENSION = '''
def register(registry):
    partner = registry.model("Partner")

    @partner.method("greet")
    def greet_customer(rec, name):
        return rec.super().greet(name) + ", valued customer"

    @partner.method("display_name")
    def display_name_upper(rec):
        return rec.super().display_name().upper()


def register_skip(registry):
    partner = registry.model("Partner")

    @partner.method("greet")
    def greet_skipping_sales(rec, name):
        return rec.super().super().greet(name)
'''

LOOKUP_EXTENSION = '''
def register(registry):
    registry.get("Missing").register_method("greet", lambda rec, name: name)
'''

EXTENSION_MODULES = (
    "layered_test_crm_base",
    "layered_test_crm_sales",
    "layered_test_crm_lookup",
)


@pytest.fixture()
def extensions_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Write the CRM extension modules to ``tmp_path`` and make them importable."""
    (tmp_path / "layered_test_crm_base.py").write_text(
        textwrap.dedent(BASE_EXTENSION), encoding="utf-8"
    )
    (tmp_path / "layered_test_crm_sales.py").write_text(
        textwrap.dedent(SALES_EXTENSION), encoding="utf-8"
    )
    (tmp_path / "layered_test_crm_lookup.py").write_text(
        textwrap.dedent(LOOKUP_EXTENSION), encoding="utf-8"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    yield tmp_path
    for name in EXTENSION_MODULES:
        sys.modules.pop(name, None)


@pytest.fixture()
def config_file(extensions_dir: Path) -> Path:
    """A configuration loading the base extension, then the sales extension."""
    path = extensions_dir / "layered.yaml"
    path.write_text(
        "extensions:\n"
        "  - layered_test_crm_base\n"
        "  - layered_test_crm_sales\n"
        "freeze: true\n",
        encoding="utf-8",
    )
    return path
