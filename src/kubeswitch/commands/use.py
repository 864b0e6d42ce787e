"""use: switch the current context."""

from __future__ import annotations

import structlog

from kubeswitch.commands.resolver import pick, read_last
from kubeswitch.errors import EmptyConfigError, NotFoundError
from kubeswitch.models import KubeConfig, SwitchResult
from kubeswitch.runtime import Runtime
from kubeswitch.validation import LAST_SELECTION

log = structlog.get_logger()


def select_context(runtime: Runtime, config: KubeConfig, name: str | None) -> str:
    """Resolve the target context from an explicit name, ``-``, or the picker."""
    if name:
        target = name
        if name == LAST_SELECTION:
            target = read_last(runtime.store.last_context, "cluster")
        if target not in config.contexts:
            msg = f"Cannot find cluster {target!r}"
            raise NotFoundError(msg)
        return target

    names = config.context_names()
    if not names:
        msg = "No cluster to use"
        raise EmptyConfigError(msg)
    return pick(runtime.picker, names)


def use_context(runtime: Runtime, name: str | None = None) -> SwitchResult:
    """Make ``name`` the current context.

    The context that was current before is recorded in the last-context marker
    ahead of the config write, so ``use -`` swaps between the two.

    Args:
        runtime: Injected collaborators.
        name: Context name, ``-`` for the last used one, or None to pick interactively.

    Returns:
        The switch outcome.
    """
    config = runtime.store.load()
    target = select_context(runtime, config, name)

    previous = config.current_context
    changed = previous != target
    if changed:
        runtime.store.last_context.write(previous)
    config.current_context = target
    runtime.store.replace(config)

    log.info("context_switched", context=target, previous=previous, changed=changed)
    return SwitchResult(kind="context", name=target, previous=previous, changed=changed)
