"""Snapshot of a pod as seen by the counter engine."""

from typing import Any

from pydantic import BaseModel, Field


class Pod(BaseModel):
    """Request-scoped copy of a pod.

    `resource_version` is the store's version token; a write carrying a stale
    token is rejected. `manifest` is the raw object the snapshot was built from,
    kept opaque so the store can write the whole record back.
    """

    namespace: str
    name: str
    labels: dict[str, str] = Field(default_factory=dict)
    resource_version: str
    manifest: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
