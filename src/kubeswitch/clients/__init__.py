"""Client wrappers for the Kubernetes API."""

from __future__ import annotations

from pathlib import Path

from kubernetes import client as k8s_client
from kubernetes.config import new_client_from_config


def load_k8s_api_client(kubeconfig: Path, context: str) -> k8s_client.ApiClient:
    """Create an isolated Kubernetes API client for one context of a kubeconfig file.

    Refreshed credentials are not written back to the file.
    """
    return new_client_from_config(config_file=str(kubeconfig), context=context, persist_config=False)
