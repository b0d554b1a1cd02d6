"""Error taxonomy for release queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from release_inventory.inventory.models import ResourceKind


class ReleaseInventoryError(Exception):
    """Base class for every error surfaced as a query failure."""


class BatchDecodeError(ReleaseInventoryError):
    """The batch envelope could not be decoded; fatal for the whole batch."""


class QueryDecodeError(ReleaseInventoryError):
    """A query payload is not valid query JSON."""

    def __init__(self, cause: str) -> None:
        super().__init__(f"failed to parse query JSON: {cause}")
        self.cause = cause


class QueryValidationError(ReleaseInventoryError):
    """A required query field is missing or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"missing or invalid '{field}'")
        self.field = field


class ClientProviderError(ReleaseInventoryError):
    """The cluster client could not be constructed."""


class ClusterClientError(ReleaseInventoryError):
    """A single list call against the cluster API failed."""


class ClusterQueryError(ReleaseInventoryError):
    """Listing one resource kind failed while fetching a release."""

    def __init__(self, kind: ResourceKind, cause: str) -> None:
        super().__init__(f"failed to list {kind.plural}: {cause}")
        self.kind = kind
        self.cause = cause
