"""Batch query processing: decode → validate → fetch → materialize, per query."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

from pydantic import TypeAdapter, ValidationError

from release_inventory.cluster.client import KubernetesClientProvider
from release_inventory.config import Settings, get_settings
from release_inventory.errors import (
    BatchDecodeError,
    QueryDecodeError,
    QueryValidationError,
    ReleaseInventoryError,
)
from release_inventory.inventory.fetcher import ResourceFetcher
from release_inventory.inventory.frame import materialize
from release_inventory.inventory.models import (
    DataQuery,
    Query,
    QueryDataResponse,
    QueryPayload,
    QueryResult,
)
from release_inventory.inventory.selector import derive_selector

logger = logging.getLogger(__name__)

# A JSON null body decodes to an empty payload and fails validation, not decoding
_PAYLOAD_ADAPTER: TypeAdapter[QueryPayload | None] = TypeAdapter(QueryPayload | None)


class QueryDataHandler(Protocol):
    """Anything that answers a batch of independent queries."""

    def query_data(self, queries: Iterable[DataQuery]) -> QueryDataResponse: ...


def _summarize_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def decode_query(data_query: DataQuery) -> Query:
    """
    Decode and validate one query payload.

    Raises QueryDecodeError for malformed JSON and QueryValidationError for a
    missing namespace or release (namespace is checked first).
    """
    payload = data_query.payload
    try:
        if isinstance(payload, (str, bytes, bytearray)):
            body = _PAYLOAD_ADAPTER.validate_json(payload)
        else:
            body = _PAYLOAD_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise QueryDecodeError(_summarize_validation_error(e)) from e
    if body is None:
        body = QueryPayload()

    if not body.namespace:
        raise QueryValidationError("namespace")
    if not body.release:
        raise QueryValidationError("release")
    return Query(ref_id=data_query.ref_id, namespace=body.namespace, release=body.release)


def load_batch(raw: str | bytes) -> list[DataQuery]:
    """
    Decode a batch envelope: a JSON array of objects, each with a ``refId``.

    The query payload is the element's ``json`` value when present, otherwise
    the element itself with ``refId`` removed.
    """
    try:
        items = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BatchDecodeError(f"failed to parse batch JSON: {e}") from e
    if not isinstance(items, list):
        raise BatchDecodeError("batch must be a JSON array of queries")

    queries: list[DataQuery] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict) or not isinstance(item.get("refId"), str):
            raise BatchDecodeError(f"batch element {i} must be an object with a string 'refId'")
        if "json" in item:
            payload: Any = item["json"]
        else:
            payload = {k: v for k, v in item.items() if k != "refId"}
        queries.append(DataQuery(ref_id=item["refId"], payload=payload))
    return queries


class ReleaseDatasource:
    """Answers release queries; a failing query never affects its siblings."""

    def __init__(self, fetcher: ResourceFetcher) -> None:
        self.fetcher = fetcher

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ReleaseDatasource:
        opts = settings or get_settings()
        return cls(ResourceFetcher(KubernetesClientProvider(opts), parallel=opts.parallel_fetch))

    def query_data(self, queries: Iterable[DataQuery]) -> QueryDataResponse:
        """Process every query in order; one result per identifier."""
        response = QueryDataResponse()
        for data_query in queries:
            if data_query.ref_id in response.responses:
                logger.warning("Duplicate query identifier %r; keeping the last result", data_query.ref_id)
            response.responses[data_query.ref_id] = self.handle_query(data_query)
        return response

    def handle_query(self, data_query: DataQuery) -> QueryResult:
        try:
            query = decode_query(data_query)
            selector = derive_selector(query.release)
            logger.debug("Query %s: namespace=%s selector=%s", query.ref_id, query.namespace, selector)
            resources = self.fetcher.fetch(query.namespace, selector)
        except ReleaseInventoryError as e:
            logger.warning("Query %s failed: %s", data_query.ref_id, e)
            return QueryResult(ref_id=data_query.ref_id, error=str(e))
        except Exception as e:
            logger.exception("Query %s failed unexpectedly", data_query.ref_id)
            return QueryResult(ref_id=data_query.ref_id, error=f"unexpected error: {e}")
        return QueryResult(ref_id=data_query.ref_id, frames=[materialize(resources)])


if TYPE_CHECKING:
    _: type[QueryDataHandler] = ReleaseDatasource
