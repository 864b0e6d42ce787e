"""Tests for config.py: settings, kubeconfig path resolution, alias table loading."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from kubeswitch.config import (
    ALIAS_FILENAME,
    AliasTable,
    SwitchConfig,
    get_config,
    load_alias_table,
    resolve_kubeconfig_path,
)
from kubeswitch.errors import ConfigError
from kubeswitch.runtime import build_runtime


class TestResolveKubeconfigPath:
    def test_default_when_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            path = resolve_kubeconfig_path()
        assert path == Path("~/.kube/config").expanduser()

    def test_single_entry(self, tmp_path: Path) -> None:
        target = tmp_path / "config"
        assert resolve_kubeconfig_path(str(target)) == target

    def test_first_existing_entry_wins(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing"
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.write_text("")
        second.write_text("")
        value = os.pathsep.join([str(missing), str(first), str(second)])
        assert resolve_kubeconfig_path(value) == first

    def test_last_entry_when_none_exist(self, tmp_path: Path) -> None:
        value = os.pathsep.join([str(tmp_path / "a"), str(tmp_path / "b")])
        assert resolve_kubeconfig_path(value) == tmp_path / "b"

    def test_reads_kubeconfig_env(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"KUBECONFIG": str(tmp_path / "cfg")}):
            assert resolve_kubeconfig_path() == tmp_path / "cfg"


class TestSwitchConfig:
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = get_config()
        assert config.picker == "fzf"
        assert config.editor is None
        assert config.log_level == "warning"

    def test_env_overrides(self, tmp_path: Path) -> None:
        env = {
            "KUBECONFIG": str(tmp_path / "config"),
            "KUBESWITCH_PICKER": "sk",
            "EDITOR": "vim",
            "KUBESWITCH_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            config = SwitchConfig()
        assert config.kubeconfig == tmp_path / "config"
        assert config.picker == "sk"
        assert config.editor == "vim"
        assert config.log_level == "debug"

    def test_empty_editor_is_none(self) -> None:
        with patch.dict(os.environ, {"EDITOR": ""}, clear=True):
            assert SwitchConfig().editor is None

    def test_alias_path_beside_kubeconfig(self, tmp_path: Path) -> None:
        config = SwitchConfig(kubeconfig=tmp_path / "config")
        assert config.alias_path == tmp_path / ALIAS_FILENAME

    def test_is_frozen(self, tmp_path: Path) -> None:
        config = SwitchConfig(kubeconfig=tmp_path / "config")
        with pytest.raises(AttributeError):
            config.picker = "other"  # type: ignore[misc]


class TestAliasTable:
    def test_first_matching_prefix_wins(self) -> None:
        table = AliasTable((("prod-", ("a", "b")), ("prod-east", ("c",))))
        assert table.match("prod-east") == ["a", "b"]

    def test_no_match(self) -> None:
        table = AliasTable((("prod-", ("a",)),))
        assert table.match("dev") is None

    def test_empty_table(self) -> None:
        assert AliasTable().match("anything") is None
        assert AliasTable().entries == ()


class TestLoadAliasTable:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        table = load_alias_table(tmp_path / ALIAS_FILENAME)
        assert table.entries == ()

    def test_empty_file_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / ALIAS_FILENAME
        path.write_text("")
        assert load_alias_table(path).entries == ()

    def test_keeps_file_order(self, tmp_path: Path) -> None:
        path = tmp_path / ALIAS_FILENAME
        path.write_text("prod-: [a, b]\nprod-east: [c]\ndev: [x]\n")
        table = load_alias_table(path)
        assert [prefix for prefix, _ in table.entries] == ["prod-", "prod-east", "dev"]
        assert table.match("prod-east-1") == ["a", "b"]
        assert table.match("dev-2") == ["x"]

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / ALIAS_FILENAME
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_alias_table(path)

    def test_value_not_a_list(self, tmp_path: Path) -> None:
        path = tmp_path / ALIAS_FILENAME
        path.write_text("prod-: a\n")
        with pytest.raises(ConfigError, match="list of namespace names"):
            load_alias_table(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / ALIAS_FILENAME
        path.write_text("prod-: [a\n")
        with pytest.raises(ConfigError, match="Cannot read alias file"):
            load_alias_table(path)

    def test_runtime_reads_alias_beside_configured_kubeconfig(self, tmp_path: Path) -> None:
        (tmp_path / ALIAS_FILENAME).write_text("dev: [one]\n")
        with patch.dict(os.environ, {"KUBECONFIG": str(tmp_path / "config")}, clear=True):
            runtime = build_runtime()
        assert runtime.load_aliases().match("dev") == ["one"]
