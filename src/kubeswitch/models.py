"""Pydantic v2 models for the kubeconfig document and command results."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kubeswitch.errors import ConfigError

# Top-level keys owned by the model; everything else is carried through untouched.
_MANAGED_KEYS = {"clusters", "users", "contexts", "current-context"}

# Kubeconfig list key -> key of the payload inside each named entry.
_NAMED_LISTS = {"clusters": "cluster", "users": "user", "contexts": "context"}


class Context(BaseModel):
    """A named binding of cluster, user, and namespace."""

    # Unknown context keys (e.g. extensions) survive a load/save cycle.
    model_config = ConfigDict(extra="allow")

    cluster: str = ""
    user: str = ""
    namespace: str = ""

    @field_validator("cluster", "user", "namespace", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_payload(self) -> dict[str, Any]:
        data = self.model_dump()
        if not data.get("namespace"):
            data.pop("namespace", None)
        return data


def _named_entries(raw: dict[str, Any], key: str) -> dict[str, dict[str, Any]]:
    items = raw.get(key) or []
    if not isinstance(items, list):
        msg = f"kubeconfig '{key}' must be a list, got {type(items).__name__}."
        raise ConfigError(msg)

    payload_key = _NAMED_LISTS[key]
    entries: dict[str, dict[str, Any]] = {}
    for item in items:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            msg = f"Every entry of kubeconfig '{key}' needs a string 'name'."
            raise ConfigError(msg)
        payload = item.get(payload_key) or {}
        if not isinstance(payload, dict):
            msg = f"kubeconfig {payload_key} '{item['name']}' must be a mapping."
            raise ConfigError(msg)
        entries[item["name"]] = payload
    return entries


class KubeConfig(BaseModel):
    """The parts of a kubeconfig file that kubeswitch reads and writes.

    Clusters and users are opaque mappings keyed by name. Iteration order of the
    mappings carries no meaning; callers sort where order is visible.
    """

    clusters: dict[str, dict[str, Any]] = Field(default_factory=dict)
    users: dict[str, dict[str, Any]] = Field(default_factory=dict)
    contexts: dict[str, Context] = Field(default_factory=dict)
    current_context: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, raw: Any) -> KubeConfig:
        """Build a KubeConfig from a parsed YAML document.

        ``None`` (an empty file) yields an empty config.

        Raises:
            ConfigError: If the document does not have the kubeconfig shape.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            msg = f"kubeconfig must be a mapping, got {type(raw).__name__}."
            raise ConfigError(msg)

        try:
            contexts = {
                name: Context.model_validate(payload) for name, payload in _named_entries(raw, "contexts").items()
            }
        except ValidationError as exc:
            msg = f"Invalid context in kubeconfig: {exc.errors()[0]['msg']}"
            raise ConfigError(msg) from exc

        current = raw.get("current-context") or ""
        if not isinstance(current, str):
            msg = "kubeconfig 'current-context' must be a string."
            raise ConfigError(msg)

        return cls(
            clusters=_named_entries(raw, "clusters"),
            users=_named_entries(raw, "users"),
            contexts=contexts,
            current_context=current,
            extra={k: v for k, v in raw.items() if k not in _MANAGED_KEYS},
        )

    def to_document(self) -> dict[str, Any]:
        """Render the kubeconfig document with name-sorted lists."""
        doc: dict[str, Any] = {
            "apiVersion": self.extra.get("apiVersion", "v1"),
            "kind": self.extra.get("kind", "Config"),
            "clusters": [{"name": n, "cluster": self.clusters[n]} for n in sorted(self.clusters)],
            "contexts": [{"name": n, "context": self.contexts[n].to_payload()} for n in sorted(self.contexts)],
            "current-context": self.current_context,
            "users": [{"name": n, "user": self.users[n]} for n in sorted(self.users)],
        }
        for key, value in self.extra.items():
            doc.setdefault(key, value)
        return doc

    def context_names(self) -> list[str]:
        """Context names sorted ascending."""
        return sorted(self.contexts)

    def server_for(self, context_name: str) -> str:
        """Server endpoint of the context's cluster, or ``""`` when the cluster is missing."""
        context = self.contexts.get(context_name)
        if context is None:
            return ""
        cluster = self.clusters.get(context.cluster) or {}
        return str(cluster.get("server") or "")


# --- Command results ---


class SwitchResult(BaseModel):
    """Outcome of a context or namespace switch."""

    kind: Literal["context", "namespace"]
    name: str
    previous: str
    changed: bool


class ContextRow(BaseModel):
    """One row of ``list`` output."""

    name: str
    namespace: str
    current: bool = False
    server: str | None = None


class ListOutput(BaseModel):
    """Output for ``list``."""

    rows: list[ContextRow]
    wide: bool = False


class SetResult(BaseModel):
    """Outcome of ``set``; ``applied`` is False when the edit was cancelled."""

    name: str
    applied: bool
    namespace: str | None = None


class DeleteResult(BaseModel):
    """Outcome of ``del``."""

    name: str
    was_current: bool
    removed: list[Literal["context", "user", "cluster"]] = Field(default_factory=list)


class CurrentSelection(BaseModel):
    """The current context and its effective namespace."""

    context: str
    namespace: str
