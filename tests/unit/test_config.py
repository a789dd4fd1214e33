"""Unit tests for layered.config — DispatchConfig, load_config, bootstrap."""
from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from layered.config import ConfigError, DispatchConfig, bootstrap, load_config
from layered.registry.models import ModelRegistry


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "layered.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDispatchConfig:
    def test_defaults(self) -> None:
        config = DispatchConfig()
        assert config.extensions == []
        assert config.entrypoint_group is None
        assert config.freeze is False

    def test_from_dict(self) -> None:
        config = DispatchConfig.from_dict(
            {"extensions": ["a", "b:register"], "freeze": True}
        )
        assert config.extensions == ["a", "b:register"]
        assert config.freeze is True

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ConfigError, match="colour"):
            DispatchConfig.from_dict({"colour": "blue"})

    def test_extensions_must_be_strings(self) -> None:
        with pytest.raises(ConfigError):
            DispatchConfig.from_dict({"extensions": [1, 2]})

    @pytest.mark.parametrize("value", ["false", "no", 0, 1, None])
    def test_freeze_must_be_boolean(self, value: object) -> None:
        with pytest.raises(ConfigError, match="freeze"):
            DispatchConfig.from_dict({"freeze": value})

    def test_entrypoint_group_must_be_string(self) -> None:
        with pytest.raises(ConfigError, match="entrypoint_group"):
            DispatchConfig.from_dict({"entrypoint_group": ["a", "b"]})

    def test_null_entrypoint_group_allowed(self) -> None:
        assert DispatchConfig.from_dict({"entrypoint_group": None}).entrypoint_group is None

    def test_quoted_false_in_yaml_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="freeze"):
            load_config(_write(tmp_path, 'freeze: "false"\n'))

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(ConfigError):
            DispatchConfig.from_dict(["a"])  # type: ignore[arg-type]

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)


class TestLoadConfig:
    def test_reads_yaml(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "extensions:\n  - crm.base\n  - crm.sales\n"
            "entrypoint_group: layered.extensions\nfreeze: true\n",
        )
        config = load_config(path)
        assert config.extensions == ["crm.base", "crm.sales"]
        assert config.entrypoint_group == "layered.extensions"
        assert config.freeze is True

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(_write(tmp_path, "")) == DispatchConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(_write(tmp_path, "extensions: [unclosed\n"))


class TestBootstrap:
    def test_loads_extensions_in_order(self) -> None:
        order: list[str] = []
        config = DispatchConfig(extensions=["first", "second"])
        with patch.object(
            ModelRegistry, "load_extension", side_effect=order.append
        ):
            bootstrap(config)
        assert order == ["first", "second"]

    def test_uses_given_registry(self, registry: ModelRegistry) -> None:
        assert bootstrap(DispatchConfig(), registry) is registry

    def test_creates_registry_when_missing(self) -> None:
        assert isinstance(bootstrap(DispatchConfig()), ModelRegistry)

    def test_freeze(self, registry: ModelRegistry) -> None:
        bootstrap(DispatchConfig(freeze=True), registry)
        assert registry.frozen

    def test_entrypoints_loaded_before_extensions(self, registry: ModelRegistry) -> None:
        events: list[str] = []
        config = DispatchConfig(extensions=["explicit"], entrypoint_group="grp")
        with patch.object(
            ModelRegistry, "load_entrypoints", side_effect=lambda group: events.append(group)
        ), patch.object(
            ModelRegistry, "load_extension", side_effect=events.append
        ):
            bootstrap(config, registry)
        assert events == ["grp", "explicit"]

    def test_no_entrypoint_discovery_by_default(self, registry: ModelRegistry) -> None:
        with patch.object(ModelRegistry, "load_entrypoints") as mocked:
            bootstrap(DispatchConfig(), registry)
        mocked.assert_not_called()
