"""ns: switch the namespace of the current context."""

from __future__ import annotations

import structlog

from kubeswitch.commands.resolver import current_context, namespace_candidates, pick, read_last
from kubeswitch.config import DEFAULT_NAMESPACE
from kubeswitch.errors import NoNamespacesError
from kubeswitch.models import SwitchResult
from kubeswitch.runtime import Runtime
from kubeswitch.validation import LAST_SELECTION, validate_namespace

log = structlog.get_logger()


def select_namespace(runtime: Runtime, context_name: str, namespace: str | None) -> str:
    """Resolve the target namespace from an explicit name, ``-``, or the picker."""
    if namespace:
        if namespace == LAST_SELECTION:
            return read_last(runtime.store.last_namespace, "namespace")
        validate_namespace(namespace)
        return namespace

    items = namespace_candidates(runtime, context_name)
    if not items:
        msg = "No namespace to use"
        raise NoNamespacesError(msg)
    return pick(runtime.picker, items)


def switch_namespace(runtime: Runtime, namespace: str | None = None) -> SwitchResult:
    """Set the namespace of the current context.

    An unset namespace is recorded in the last-namespace marker as ``default``,
    which is what it means to kubectl.
    """
    config = runtime.store.load()
    context_name, context = current_context(config)
    target = select_namespace(runtime, context_name, namespace)

    previous = context.namespace or DEFAULT_NAMESPACE
    changed = previous != target
    if changed:
        runtime.store.last_namespace.write(previous)
    context.namespace = target
    runtime.store.replace(config)

    log.info("namespace_switched", context=context_name, namespace=target, previous=previous, changed=changed)
    return SwitchResult(kind="namespace", name=target, previous=previous, changed=changed)
