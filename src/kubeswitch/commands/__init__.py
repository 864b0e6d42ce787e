"""Selection commands: each takes a Runtime and returns a result model."""

from __future__ import annotations

from kubeswitch.commands.completion import complete, complete_contexts, complete_namespaces
from kubeswitch.commands.delete import delete_cluster
from kubeswitch.commands.listing import current_selection, list_contexts
from kubeswitch.commands.ns import switch_namespace
from kubeswitch.commands.set_cluster import set_cluster
from kubeswitch.commands.use import use_context

__all__ = [
    "complete",
    "complete_contexts",
    "complete_namespaces",
    "current_selection",
    "delete_cluster",
    "list_contexts",
    "set_cluster",
    "switch_namespace",
    "use_context",
]
