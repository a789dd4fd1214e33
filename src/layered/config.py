"""Startup configuration: which extensions to load, in which order.

A configuration file is YAML::

    # layered.yaml
    entrypoint_group: layered.extensions   # omit or null to skip discovery
    extensions:                            # later entries take priority
      - crm_base.models
      - crm_sales.models:register
    freeze: true

``bootstrap`` turns a ``DispatchConfig`` into a populated registry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from layered.registry.models import ModelRegistry

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file is missing or malformed."""


@dataclass
class DispatchConfig:
    """Settings for building a ``ModelRegistry`` at startup.

    Parameters
    ----------
    extensions:
        Extension references in load order. Layers registered by later
        extensions override those registered by earlier ones.
    entrypoint_group:
        Entry-point group to discover extensions from before loading
        ``extensions``, or ``None`` to skip discovery.
    freeze:
        Freeze the registry once every extension has been loaded.
    """

    extensions: list[str] = field(default_factory=list)
    entrypoint_group: str | None = None
    freeze: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DispatchConfig:
        """Build a config from a mapping, rejecting unknown keys."""
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")
        extensions = data.get("extensions") or []
        if not isinstance(extensions, list) or not all(
            isinstance(e, str) for e in extensions
        ):
            raise ConfigError("'extensions' must be a list of strings")
        entrypoint_group = data.get("entrypoint_group")
        if entrypoint_group is not None and not isinstance(entrypoint_group, str):
            raise ConfigError("'entrypoint_group' must be a string or null")
        freeze = data.get("freeze", False)
        if not isinstance(freeze, bool):
            raise ConfigError(f"'freeze' must be true or false, got {freeze!r}")
        return cls(
            extensions=list(extensions),
            entrypoint_group=entrypoint_group,
            freeze=freeze,
        )


def load_config(path: str | Path) -> DispatchConfig:
    """Read a ``DispatchConfig`` from a YAML file.

    An empty file yields the default configuration.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid YAML, or holds
        unknown or badly typed keys.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    return DispatchConfig.from_dict(data or {})


def bootstrap(
    config: DispatchConfig, registry: ModelRegistry | None = None
) -> ModelRegistry:
    """Populate a registry from ``config`` and return it.

    Entry-point extensions are loaded first, then ``config.extensions``
    in order, so explicitly listed extensions take priority.
    """
    registry = registry if registry is not None else ModelRegistry()
    if config.entrypoint_group:
        registry.load_entrypoints(config.entrypoint_group)
    for extension in config.extensions:
        registry.load_extension(extension)
    if config.freeze:
        registry.freeze()
    logger.debug(
        "Bootstrapped registry %r: %d model(s), %d extension(s)",
        registry.name,
        len(registry),
        len(config.extensions),
    )
    return registry
