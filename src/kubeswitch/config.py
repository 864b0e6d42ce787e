"""Runtime settings, side-file locations, and the namespace alias table."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from kubeswitch.errors import ConfigError

DEFAULT_KUBECONFIG = Path("~/.kube/config")
DEFAULT_NAMESPACE = "default"

ALIAS_FILENAME = "ns_alias.yaml"
LAST_CONTEXT_FILENAME = ".last_switch_cluster"
LAST_NAMESPACE_FILENAME = ".last_switch_ns"


def resolve_kubeconfig_path(value: str | None = None) -> Path:
    """Pick the kubeconfig file to operate on.

    ``value`` follows the ``KUBECONFIG`` convention: an ``os.pathsep`` separated
    list of files. The first existing entry wins; when none exists the last one
    is used so that a later write creates it.
    """
    if value is None:
        value = os.environ.get("KUBECONFIG", "")
    candidates = [Path(p).expanduser() for p in value.split(os.pathsep) if p]
    if not candidates:
        return DEFAULT_KUBECONFIG.expanduser()
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return candidates[-1]


@dataclass(frozen=True)
class SwitchConfig:
    """Process settings with environment variable overrides."""

    kubeconfig: Path = field(default_factory=resolve_kubeconfig_path)
    picker: str = field(default_factory=lambda: os.environ.get("KUBESWITCH_PICKER", "fzf"))
    editor: str | None = field(default_factory=lambda: os.environ.get("EDITOR") or None)
    log_level: str = field(default_factory=lambda: os.environ.get("KUBESWITCH_LOG_LEVEL", "warning"))

    @property
    def alias_path(self) -> Path:
        return self.kubeconfig.parent / ALIAS_FILENAME


def get_config() -> SwitchConfig:
    """Return settings with environment variable overrides applied."""
    return SwitchConfig()


@dataclass(frozen=True)
class AliasTable:
    """Namespace shortlists keyed by context-name prefix, in file order."""

    entries: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def match(self, context_name: str) -> list[str] | None:
        """Return the namespaces of the first prefix matching ``context_name``.

        ``None`` means no prefix matched and the caller should ask the cluster.
        """
        for prefix, namespaces in self.entries:
            if context_name.startswith(prefix):
                return list(namespaces)
        return None


def load_alias_table(path: Path) -> AliasTable:
    """Parse an alias YAML file into an AliasTable.

    Args:
        path: Path to the alias file.

    Returns:
        The table, empty when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or is malformed.
    """
    if not path.exists():
        return AliasTable()

    try:
        raw: Any = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read alias file {path}: {exc}"
        raise ConfigError(msg) from exc

    if raw is None:
        return AliasTable()
    if not isinstance(raw, dict):
        msg = f"Alias file {path} must be a mapping of context prefix to namespace list."
        raise ConfigError(msg)

    errors: list[str] = []
    entries: list[tuple[str, tuple[str, ...]]] = []
    for prefix, namespaces in raw.items():
        if not isinstance(prefix, str):
            errors.append(f"{prefix!r}: prefix must be a string")
            continue
        if not isinstance(namespaces, list) or not all(isinstance(ns, str) for ns in namespaces):
            errors.append(f"{prefix!r}: value must be a list of namespace names")
            continue
        entries.append((prefix, tuple(namespaces)))

    if errors:
        detail = "; ".join(errors)
        msg = f"Invalid alias file {path}: {detail}."
        raise ConfigError(msg)

    return AliasTable(tuple(entries))
