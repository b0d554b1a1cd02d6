"""Materialize fetched resources into a result frame."""

from __future__ import annotations

from collections.abc import Iterable

from release_inventory.inventory.models import Column, Frame, Resource

FRAME_NAME = "response"
FRAME_COLUMNS = ("kind", "name", "status")


def new_frame(name: str = FRAME_NAME) -> Frame:
    """Empty frame with the kind/name/status string columns."""
    return Frame(name=name, columns=[Column(name=c) for c in FRAME_COLUMNS])


def materialize(resources: Iterable[Resource]) -> Frame:
    """One row per resource, in input order."""
    frame = new_frame()
    for resource in resources:
        frame.append_row(resource.kind.value, resource.name, resource.status)
    return frame
