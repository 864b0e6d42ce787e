"""Candidate resolution shared by the switch commands and shell completion."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from kubeswitch.errors import NoCurrentContextError, NoPriorSelectionError, NotFoundError
from kubeswitch.models import Context, KubeConfig
from kubeswitch.picker import Picker
from kubeswitch.runtime import Runtime
from kubeswitch.store import LastSelectionMarker

log = structlog.get_logger()


def current_context(config: KubeConfig) -> tuple[str, Context]:
    """Return the current context name and entry.

    Raises:
        NoCurrentContextError: If no context is current.
        NotFoundError: If the current-context reference names a missing context.
    """
    name = config.current_context
    if not name:
        msg = "No context selected"
        raise NoCurrentContextError(msg)
    context = config.contexts.get(name)
    if context is None:
        msg = f"Cannot find context {name!r}"
        raise NotFoundError(msg)
    return name, context


def read_last(marker: LastSelectionMarker, what: str) -> str:
    """Read a marker, failing when nothing was recorded yet."""
    value = marker.read()
    if not value:
        msg = f"You have not switched to any {what} yet"
        raise NoPriorSelectionError(msg)
    return value


def pick(picker: Picker, items: Sequence[str]) -> str:
    idx = picker.choose(items)
    return items[idx]


def namespace_candidates(runtime: Runtime, context_name: str) -> list[str]:
    """Namespaces offered for ``context_name``: an alias shortlist, else the live list.

    Raises:
        ConfigError: If the alias file is malformed.
        BackendUnavailableError: If the live listing fails.
    """
    aliases = runtime.load_aliases()
    items = aliases.match(context_name)
    if items:
        log.debug("namespace_alias_matched", context=context_name, namespaces=len(items))
        return items
    return runtime.namespaces.list_namespaces(context_name)
