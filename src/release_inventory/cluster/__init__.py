"""Cluster layer: read-only access to the Kubernetes API."""

from release_inventory.cluster.client import (
    ClientProvider,
    ClusterClient,
    KubernetesClientProvider,
    KubernetesClusterClient,
)

__all__ = [
    "ClientProvider",
    "ClusterClient",
    "KubernetesClientProvider",
    "KubernetesClusterClient",
]
