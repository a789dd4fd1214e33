"""Integration tests.

These tests write extension modules and YAML configurations to disk,
import them, and drive the full stack including the CLI. Run only the
fast unit tests with ``pytest tests/unit/``.
"""
from __future__ import annotations
