"""Registries: the methods of a model, and the models of a process.

Extensions contribute layers by registering them on models during
startup, either directly or through "layered.extensions" entry-points.
"""
from __future__ import annotations

from layered.registry.methods import MethodRegistry
from layered.registry.models import DEFAULT_ENTRYPOINT_GROUP, Model, ModelRegistry

__all__ = ["DEFAULT_ENTRYPOINT_GROUP", "MethodRegistry", "Model", "ModelRegistry"]
