"""Validation helpers for names supplied on the command line."""

from __future__ import annotations

import re

from kubeswitch.errors import InvalidNameError

# RFC 1123 label: lowercase alphanumeric and hyphens, 1-63 chars, starts/ends with alphanumeric
_NAMESPACE_RE = re.compile(r"^[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?$")

# "-" selects the last-used entry and cannot name a context.
LAST_SELECTION = "-"


def validate_namespace(namespace: str) -> None:
    """Validate a Kubernetes namespace name against RFC 1123."""
    if not _NAMESPACE_RE.match(namespace):
        msg = f"Invalid namespace: {namespace!r}. Must be a valid RFC 1123 label."
        raise InvalidNameError(msg)


def validate_context_name(name: str) -> None:
    """Validate a context name used to register a cluster."""
    if not name or not name.strip():
        msg = "Context name must not be empty."
        raise InvalidNameError(msg)
    if name == LAST_SELECTION:
        msg = f"Context name {name!r} is reserved for selecting the last used context."
        raise InvalidNameError(msg)
    if any(ch.isspace() for ch in name):
        msg = f"Invalid context name: {name!r}. Must not contain whitespace."
        raise InvalidNameError(msg)
