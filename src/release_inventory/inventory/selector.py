"""Label selector scoping every list call to one release."""

from __future__ import annotations

INSTANCE_LABEL = "app.kubernetes.io/instance"


def derive_selector(release: str) -> str:
    """Return the label selector matching objects of ``release``."""
    return f"{INSTANCE_LABEL}={release}"
