"""Switch the current Kubernetes context and namespace in a kubeconfig file."""

__version__ = "0.1.0"
