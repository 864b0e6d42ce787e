"""Collaborators shared by every command, bundled for injection."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from kubeswitch.clients.k8s_core import K8sNamespaceClient, NamespaceLister
from kubeswitch.config import AliasTable, SwitchConfig, get_config, load_alias_table
from kubeswitch.editor import Editor, ExternalEditor
from kubeswitch.picker import FzfPicker, Picker
from kubeswitch.store import ConfigStore


@dataclass
class Runtime:
    """Everything a command touches outside its own process memory."""

    store: ConfigStore
    picker: Picker
    editor: Editor
    namespaces: NamespaceLister
    settings: SwitchConfig = field(default_factory=get_config)

    def load_aliases(self) -> AliasTable:
        return load_alias_table(self.settings.alias_path)


def build_runtime(
    settings: SwitchConfig | None = None,
    *,
    notify: Callable[[str], None] | None = None,
) -> Runtime:
    """Wire the real collaborators from settings."""
    settings = settings or get_config()
    return Runtime(
        store=ConfigStore(settings.kubeconfig),
        picker=FzfPicker(settings.picker),
        editor=ExternalEditor(settings.editor, notify=notify),
        namespaces=K8sNamespaceClient(settings.kubeconfig),
        settings=settings,
    )
