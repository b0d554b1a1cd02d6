"""Fetch the pods, services and deployments of a release."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from release_inventory.errors import ClusterClientError, ClusterQueryError
from release_inventory.inventory.models import Resource, ResourceKind

if TYPE_CHECKING:
    from release_inventory.cluster.client import ClientProvider, ClusterClient

logger = logging.getLogger(__name__)

# Output order of kinds within a fetch
FETCH_ORDER = (ResourceKind.POD, ResourceKind.SERVICE, ResourceKind.DEPLOYMENT)


def _build_resource(kind: ResourceKind, obj: Any) -> Resource:
    """Build Resource from a V1Pod, V1Service or V1Deployment."""
    status = ""
    if kind == ResourceKind.POD:
        status = getattr(obj.status, "phase", None) or ""
    return Resource(kind=kind, name=obj.metadata.name, status=status)


class ResourceFetcher:
    """Lists every supported kind for a namespace/selector, all or nothing."""

    def __init__(self, provider: ClientProvider, parallel: bool = False) -> None:
        self._provider = provider
        self.parallel = parallel

    def fetch(self, namespace: str, selector: str) -> list[Resource]:
        """
        Return pods, then services, then deployments matching ``selector``.

        Raises ClientProviderError if no cluster client can be built and
        ClusterQueryError for the first kind (in fetch order) whose list call failed.
        """
        cluster = self._provider()
        try:
            if self.parallel:
                with ThreadPoolExecutor(max_workers=len(FETCH_ORDER)) as pool:
                    futures = [
                        pool.submit(self._list_kind, cluster, kind, namespace, selector)
                        for kind in FETCH_ORDER
                    ]
                    per_kind = [f.result() for f in futures]
            else:
                per_kind = [self._list_kind(cluster, kind, namespace, selector) for kind in FETCH_ORDER]
        finally:
            cluster.close()

        resources = [r for batch in per_kind for r in batch]
        logger.debug(
            "Fetched %d resources in %s for selector %s", len(resources), namespace, selector
        )
        return resources

    def _list_kind(
        self, cluster: ClusterClient, kind: ResourceKind, namespace: str, selector: str
    ) -> list[Resource]:
        try:
            items = cluster.list_objects(kind, namespace, selector)
        except ClusterClientError as e:
            raise ClusterQueryError(kind, str(e)) from e
        return [_build_resource(kind, obj) for obj in items]
