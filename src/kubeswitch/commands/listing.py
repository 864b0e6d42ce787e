"""list and the root command: report contexts and the current selection."""

from __future__ import annotations

from kubeswitch.commands.resolver import current_context
from kubeswitch.config import DEFAULT_NAMESPACE
from kubeswitch.errors import EmptyConfigError
from kubeswitch.models import ContextRow, CurrentSelection, ListOutput
from kubeswitch.runtime import Runtime


def list_contexts(runtime: Runtime, wide: bool = False) -> ListOutput:
    """Rows for every context, sorted by name, with the current one flagged.

    ``wide`` adds the server of each context's cluster; a missing cluster
    entry shows as an empty string.
    """
    config = runtime.store.load()
    if not config.contexts:
        msg = "No cluster to show"
        raise EmptyConfigError(msg)

    rows = [
        ContextRow(
            name=name,
            namespace=config.contexts[name].namespace,
            current=name == config.current_context,
            server=config.server_for(name) if wide else None,
        )
        for name in config.context_names()
    ]
    return ListOutput(rows=rows, wide=wide)


def current_selection(runtime: Runtime) -> CurrentSelection:
    """The current context and its namespace (``default`` when unset)."""
    config = runtime.store.load()
    name, context = current_context(config)
    return CurrentSelection(context=name, namespace=context.namespace or DEFAULT_NAMESPACE)
