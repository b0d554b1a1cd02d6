"""Shared fixtures: an in-memory cluster serving kubernetes client models."""

from __future__ import annotations

from typing import Any

import pytest
from kubernetes import client

from release_inventory.cluster.client import ClusterClient
from release_inventory.errors import ClusterClientError
from release_inventory.inventory.models import ResourceKind


class FakeClusterClient(ClusterClient):
    """Serves preloaded objects, filtering by namespace and ``key=value`` selector."""

    def __init__(
        self,
        objects: dict[ResourceKind, list[Any]] | None = None,
        failures: dict[ResourceKind, str] | None = None,
    ) -> None:
        self.objects = objects or {}
        self.failures = failures or {}
        self.calls: list[tuple[ResourceKind, str, str]] = []
        self.closed = 0

    def list_objects(self, kind: ResourceKind, namespace: str, selector: str) -> list[Any]:
        self.calls.append((kind, namespace, selector))
        if kind in self.failures:
            raise ClusterClientError(self.failures[kind])
        key, _, value = selector.partition("=")
        return [
            obj
            for obj in self.objects.get(kind, [])
            if obj.metadata.namespace == namespace and (obj.metadata.labels or {}).get(key) == value
        ]

    def close(self) -> None:
        self.closed += 1


def _meta(name: str, namespace: str, release: str) -> client.V1ObjectMeta:
    return client.V1ObjectMeta(
        name=name,
        namespace=namespace,
        labels={"app.kubernetes.io/instance": release},
    )


def make_pod(name: str, phase: str | None = "Running", namespace: str = "prod", release: str = "checkout") -> client.V1Pod:
    return client.V1Pod(metadata=_meta(name, namespace, release), status=client.V1PodStatus(phase=phase))


def make_service(name: str, namespace: str = "prod", release: str = "checkout") -> client.V1Service:
    return client.V1Service(metadata=_meta(name, namespace, release))


def make_deployment(name: str, namespace: str = "prod", release: str = "checkout") -> client.V1Deployment:
    labels = {"app.kubernetes.io/instance": release}
    return client.V1Deployment(
        metadata=_meta(name, namespace, release),
        spec=client.V1DeploymentSpec(
            selector=client.V1LabelSelector(match_labels=labels),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels=labels),
                spec=client.V1PodSpec(containers=[client.V1Container(name=name, image="nginx")]),
            ),
        ),
    )


@pytest.fixture
def checkout_cluster() -> FakeClusterClient:
    """One pod, service and deployment for release 'checkout' in 'prod', plus noise."""
    return FakeClusterClient(
        objects={
            ResourceKind.POD: [
                make_pod("checkout-7f"),
                make_pod("cart-1a", release="cart"),
                make_pod("checkout-7f", namespace="staging"),
            ],
            ResourceKind.SERVICE: [make_service("checkout-svc")],
            ResourceKind.DEPLOYMENT: [make_deployment("checkout"), make_deployment("cart", release="cart")],
        }
    )


@pytest.fixture
def empty_cluster() -> FakeClusterClient:
    return FakeClusterClient()


@pytest.fixture
def make_cluster():
    """Factory for FakeClusterClient with custom objects or failures."""
    return FakeClusterClient


@pytest.fixture
def k8s_objects():
    """Builders for kubernetes client model objects."""

    class _Builders:
        pod = staticmethod(make_pod)
        service = staticmethod(make_service)
        deployment = staticmethod(make_deployment)

    return _Builders
