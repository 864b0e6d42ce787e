"""set: register or edit the cluster, user, and context stored under one name."""

from __future__ import annotations

import structlog
import yaml

from kubeswitch.config import DEFAULT_NAMESPACE
from kubeswitch.editor import Editor
from kubeswitch.errors import ConfigError, InvalidEditError
from kubeswitch.models import Context, KubeConfig, SetResult
from kubeswitch.runtime import Runtime
from kubeswitch.validation import validate_context_name

log = structlog.get_logger()


def document_to_edit(config: KubeConfig, name: str) -> str:
    """YAML for the triple registered under ``name``; empty unless all three exist."""
    if name not in config.clusters or name not in config.users or name not in config.contexts:
        return ""
    single = KubeConfig(
        clusters={name: config.clusters[name]},
        users={name: config.users[name]},
        contexts={name: config.contexts[name]},
    )
    doc = single.to_document()
    doc.pop("current-context")
    return yaml.safe_dump(doc, default_flow_style=False, sort_keys=False)


def parse_edited(text: str) -> KubeConfig:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"Load edited config: {exc}"
        raise ConfigError(msg) from exc
    return KubeConfig.from_document(raw)


def set_cluster(runtime: Runtime, name: str, editor: Editor | None = None) -> SetResult:
    """Edit the entries registered under ``name`` and upsert the result.

    An edited document without any cluster or user cancels the operation and
    leaves the kubeconfig untouched.

    Args:
        runtime: Injected collaborators.
        name: Name shared by the cluster, user, and context.
        editor: Overrides ``runtime.editor`` (e.g. a merge file).

    Returns:
        The outcome; ``applied`` is False when the edit was cancelled.

    Raises:
        InvalidEditError: If the document holds more than one cluster or user.
    """
    validate_context_name(name)
    editor = editor or runtime.editor

    config = runtime.store.load()
    edited = parse_edited(editor.edit(document_to_edit(config, name)))

    if not edited.clusters or not edited.users:
        log.info("set_cancelled", name=name)
        return SetResult(name=name, applied=False)
    if len(edited.clusters) != 1 or len(edited.users) != 1:
        msg = "Invalid edit config, the number of cluster and user should be one"
        raise InvalidEditError(msg)

    cluster = next(iter(edited.clusters.values()))
    user = next(iter(edited.users.values()))

    existing = config.contexts.get(name)
    namespace = existing.namespace if existing is not None and existing.namespace else DEFAULT_NAMESPACE

    config.clusters[name] = cluster
    config.users[name] = user
    config.contexts[name] = Context(cluster=name, user=name, namespace=namespace)
    runtime.store.replace(config)

    log.info("cluster_set", name=name, namespace=namespace)
    return SetResult(name=name, applied=True, namespace=namespace)
