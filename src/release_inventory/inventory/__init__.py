"""Inventory layer: selector derivation, fetching and frame materialization."""

from release_inventory.inventory.fetcher import ResourceFetcher
from release_inventory.inventory.frame import materialize, new_frame
from release_inventory.inventory.models import (
    DataQuery,
    Frame,
    Query,
    QueryDataResponse,
    QueryResult,
    Resource,
    ResourceKind,
)
from release_inventory.inventory.selector import derive_selector

__all__ = [
    "DataQuery",
    "Frame",
    "Query",
    "QueryDataResponse",
    "QueryResult",
    "Resource",
    "ResourceFetcher",
    "ResourceKind",
    "derive_selector",
    "materialize",
    "new_frame",
]
