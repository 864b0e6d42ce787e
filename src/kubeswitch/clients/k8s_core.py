"""Kubernetes Core API wrapper for namespace listing."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import structlog
from kubernetes import client as k8s_client

from kubeswitch.clients import load_k8s_api_client
from kubeswitch.errors import BackendUnavailableError

log = structlog.get_logger()


class NamespaceLister(Protocol):
    def list_namespaces(self, context: str) -> list[str]:
        """Return the namespace names visible through ``context``."""
        ...


class K8sNamespaceClient:
    """Lists namespaces through the Core V1 API of a kubeconfig context."""

    def __init__(self, kubeconfig: Path) -> None:
        self._kubeconfig = kubeconfig
        self._api: k8s_client.CoreV1Api | None = None
        self._context: str | None = None

    def _get_api(self, context: str) -> k8s_client.CoreV1Api:
        if self._api is None or self._context != context:
            api_client = load_k8s_api_client(self._kubeconfig, context)
            self._api = k8s_client.CoreV1Api(api_client)
            self._context = context
        return self._api

    def list_namespaces(self, context: str) -> list[str]:
        """List namespace names in the order the API server returns them.

        Raises:
            BackendUnavailableError: If the client cannot be built or the call fails.
        """
        try:
            api = self._get_api(context)
            namespace_list = api.list_namespace()
        except Exception as exc:
            log.debug("namespace_listing_failed", context=context, error=str(exc))
            msg = f"Get namespaces from server: {exc}"
            raise BackendUnavailableError(msg) from exc

        return [ns.metadata.name for ns in namespace_list.items]
