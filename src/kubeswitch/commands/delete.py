"""del: remove the cluster, user, and context stored under one name."""

from __future__ import annotations

import structlog

from kubeswitch.models import DeleteResult
from kubeswitch.runtime import Runtime

log = structlog.get_logger()


def delete_cluster(runtime: Runtime, name: str) -> DeleteResult:
    """Delete the triple registered under ``name``; absent entries are skipped.

    The config is written even when nothing was removed.
    """
    config = runtime.store.load()

    removed = []
    if config.contexts.pop(name, None) is not None:
        removed.append("context")
    if config.users.pop(name, None) is not None:
        removed.append("user")
    if config.clusters.pop(name, None) is not None:
        removed.append("cluster")

    was_current = config.current_context == name
    if was_current:
        config.current_context = ""

    runtime.store.replace(config)
    log.info("cluster_deleted", name=name, removed=removed, was_current=was_current)
    return DeleteResult(name=name, was_current=was_current, removed=removed)
