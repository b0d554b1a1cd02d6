"""Read-only Kubernetes client used to list the objects of a release."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from release_inventory.config import Settings, get_settings
from release_inventory.errors import ClientProviderError, ClusterClientError
from release_inventory.inventory.models import ResourceKind

logger = logging.getLogger(__name__)


class ClusterClient(ABC):
    """Lists namespaced objects of one kind filtered by a label selector."""

    @abstractmethod
    def list_objects(self, kind: ResourceKind, namespace: str, selector: str) -> list[Any]:
        """Return the matching objects; raise ClusterClientError on failure."""
        ...

    def close(self) -> None:
        """Release any connections held by this client."""


ClientProvider = Callable[[], ClusterClient]


def _load_kube_config(
    kubeconfig_path: str | None,
    context: str | None,
    in_cluster_only: bool = False,
) -> client.Configuration:
    """Load in-cluster or kubeconfig-based configuration."""
    try:
        config.load_incluster_config()
        return client.Configuration.get_default_copy()
    except config.ConfigException as e:
        if in_cluster_only:
            raise ClientProviderError(f"failed to create in-cluster config: {e}") from e
        logger.debug("In-cluster config unavailable, falling back to kubeconfig: %s", e)
    kwargs: dict[str, Any] = {}
    if kubeconfig_path:
        kwargs["config_file"] = str(kubeconfig_path)
    if context:
        kwargs["context"] = context
    try:
        config.load_kube_config(**kwargs)
    except Exception as e:
        # Unreadable files, bad YAML and incomplete contexts all end up here
        raise ClientProviderError(f"failed to load kubeconfig: {e}") from e
    return client.Configuration.get_default_copy()


def _describe_api_error(e: ApiException) -> str:
    if e.status:
        return f"({e.status}) {e.reason}"
    return str(e.reason)


class KubernetesClusterClient(ClusterClient):
    """ClusterClient backed by the official Kubernetes Python client."""

    def __init__(
        self,
        core: client.CoreV1Api,
        apps: client.AppsV1Api,
        request_timeout: float | None = None,
        api_client: client.ApiClient | None = None,
    ) -> None:
        self._core = core
        self._apps = apps
        self._request_timeout = request_timeout
        self._api_client = api_client

    @classmethod
    def from_configuration(
        cls, cfg: client.Configuration, request_timeout: float | None = None
    ) -> KubernetesClusterClient:
        api_client = client.ApiClient(cfg)
        return cls(
            client.CoreV1Api(api_client),
            client.AppsV1Api(api_client),
            request_timeout,
            api_client=api_client,
        )

    def close(self) -> None:
        """Release the connection pool of the underlying ApiClient."""
        if self._api_client is not None:
            self._api_client.close()
            self._api_client = None

    def list_objects(self, kind: ResourceKind, namespace: str, selector: str) -> list[Any]:
        kwargs: dict[str, Any] = {"namespace": namespace, "label_selector": selector}
        if self._request_timeout is not None:
            kwargs["_request_timeout"] = self._request_timeout
        try:
            if kind == ResourceKind.POD:
                result = self._core.list_namespaced_pod(**kwargs)
            elif kind == ResourceKind.SERVICE:
                result = self._core.list_namespaced_service(**kwargs)
            elif kind == ResourceKind.DEPLOYMENT:
                result = self._apps.list_namespaced_deployment(**kwargs)
            else:
                raise ClusterClientError(f"unsupported kind: {kind}")
        except ApiException as e:
            logger.warning("Failed to list %s in %s: %s", kind.plural, namespace, e.reason)
            raise ClusterClientError(_describe_api_error(e)) from e
        except HTTPError as e:
            logger.warning("Failed to reach cluster listing %s in %s: %s", kind.plural, namespace, e)
            raise ClusterClientError(str(e)) from e
        except ValueError as e:
            # ApiValueError and urllib3 Timeout rejections of bad arguments
            logger.warning("Rejected list call for %s in %s: %s", kind.plural, namespace, e)
            raise ClusterClientError(str(e)) from e
        return list(result.items or [])


class KubernetesClientProvider:
    """Builds a fresh KubernetesClusterClient from settings on every call."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def __call__(self) -> KubernetesClusterClient:
        opts = self.settings
        cfg = _load_kube_config(
            str(opts.kubeconfig) if opts.kubeconfig else None,
            opts.context,
            in_cluster_only=opts.in_cluster_only,
        )
        return KubernetesClusterClient.from_configuration(cfg, opts.request_timeout_seconds)
