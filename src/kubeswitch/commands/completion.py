"""Shell completion candidates.

Completion runs inside the operator's shell, so every failure here turns into
an empty suggestion list instead of an error.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from kubeswitch.commands.resolver import current_context, namespace_candidates
from kubeswitch.runtime import Runtime

log = structlog.get_logger()

SUBCOMMANDS = ("del", "list", "ns", "set", "use")

# Options whose next word is a value rather than a positional argument.
_VALUE_OPTIONS = {"-f", "--file"}


def complete_contexts(runtime: Runtime, args: Sequence[str], prefix: str) -> list[str]:
    """Context names starting with ``prefix``; nothing once a name was given."""
    if args:
        return []
    try:
        config = runtime.store.load()
    except Exception as exc:
        log.debug("context_completion_failed", error=str(exc))
        return []
    return sorted(name for name in config.contexts if name.startswith(prefix))


def complete_namespaces(runtime: Runtime, args: Sequence[str], prefix: str) -> list[str]:
    """Namespaces of the current context starting with ``prefix``."""
    if args:
        return []
    try:
        config = runtime.store.load()
        context_name, _ = current_context(config)
        items = namespace_candidates(runtime, context_name)
    except Exception as exc:
        log.debug("namespace_completion_failed", error=str(exc))
        return []
    return sorted(item for item in items if item.startswith(prefix))


_COMPLETERS: dict[str, Callable[[Runtime, Sequence[str], str], list[str]]] = {
    "del": complete_contexts,
    "ns": complete_namespaces,
    "set": complete_contexts,
    "use": complete_contexts,
}


def positional_args(words: Sequence[str]) -> list[str]:
    """Drop option flags and option values from already-typed words."""
    args: list[str] = []
    skip_next = False
    for word in words:
        if skip_next:
            skip_next = False
            continue
        if word in _VALUE_OPTIONS:
            skip_next = True
            continue
        if word.startswith("-") and word != "-":
            continue
        args.append(word)
    return args


def complete(runtime: Runtime, words: Sequence[str]) -> list[str]:
    """Candidates for the command line ``words`` (program name excluded).

    The last word is the partial text being completed.
    """
    if len(words) <= 1:
        prefix = words[0] if words else ""
        return [name for name in SUBCOMMANDS if name.startswith(prefix)]

    command, *consumed, partial = words
    completer = _COMPLETERS.get(command)
    if completer is None:
        return []
    if consumed and consumed[-1] in _VALUE_OPTIONS:
        return []
    return completer(runtime, positional_args(consumed), partial)
