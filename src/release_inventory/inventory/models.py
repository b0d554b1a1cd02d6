"""Structured models for release queries, resources and result frames."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResourceKind(str, Enum):
    """Kubernetes kinds that make up a release."""

    POD = "Pod"
    SERVICE = "Service"
    DEPLOYMENT = "Deployment"

    @property
    def plural(self) -> str:
        return f"{self.value.lower()}s"


class Resource(BaseModel):
    """One cluster object belonging to a release."""

    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    name: str
    status: str = Field(default="", description="Empty when the kind has no meaningful status")


class QueryPayload(BaseModel):
    """Decoded JSON body of a single query; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", strict=True)

    namespace: str | None = None
    release: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        """Accept ``Namespace``/``RELEASE`` when the exact key is absent."""
        if not isinstance(data, dict):
            return data
        folded = {k.casefold(): k for k in data if isinstance(k, str)}
        out = dict(data)
        for name in ("namespace", "release"):
            if name not in out and name in folded:
                out[name] = data[folded[name]]
        return out


class DataQuery(BaseModel):
    """One element of an inbound batch: an identifier plus its raw JSON payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ref_id: str = Field(alias="refId")
    payload: Any = Field(
        alias="json",
        description="str, bytes or an already decoded mapping",
    )


class Query(BaseModel):
    """A validated query: both namespace and release are non-empty."""

    model_config = ConfigDict(frozen=True)

    ref_id: str
    namespace: str = Field(min_length=1)
    release: str = Field(min_length=1)


class Column(BaseModel):
    """Named, typed column of a frame."""

    name: str
    type: Literal["string"] = "string"
    values: list[str] = Field(default_factory=list)


class Frame(BaseModel):
    """Tabular result of one query."""

    name: str
    columns: list[Column] = Field(default_factory=list)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def row_count(self) -> int:
        return len(self.columns[0].values) if self.columns else 0

    def append_row(self, *values: str) -> None:
        """Append one value per column, in column order."""
        if len(values) != len(self.columns):
            raise ValueError(
                f"row has {len(values)} values, frame {self.name!r} has {len(self.columns)} columns"
            )
        for column, value in zip(self.columns, values):
            column.values.append(value)

    def rows(self) -> list[tuple[str, ...]]:
        return list(zip(*(c.values for c in self.columns)))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class QueryResult(BaseModel):
    """Outcome of one query: frames on success, an error message on failure."""

    ref_id: str
    frames: list[Frame] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def rows(self) -> list[tuple[str, ...]]:
        if not self.frames:
            return []
        return self.frames[0].rows()


class QueryDataResponse(BaseModel):
    """Results of a batch keyed by query identifier."""

    responses: dict[str, QueryResult] = Field(default_factory=dict)

    @property
    def failed(self) -> list[QueryResult]:
        return [r for r in self.responses.values() if not r.ok]
