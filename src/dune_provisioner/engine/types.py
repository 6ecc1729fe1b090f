"""Engine types (results, remote snapshots, drift reports)."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Mode(str, Enum):
    EXISTING = "existing"
    CREATED = "created"
    UPDATED = "updated"


class DriftStatus(str, Enum):
    MISSING = "missing"
    SKIP = "skip"
    OK = "ok"
    DRIFT = "drift"


class RemoteResource(BaseModel):
    """What a read endpoint returned for one resource.

    ``observable_fields`` holds only what the endpoint actually exposes;
    absence of a key means the value is unknown, not empty.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    observable_fields: dict[str, Any] = Field(default_factory=dict)


class ReconciliationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    mode: Mode
    name: str | None = None
    execution_id: str | None = None
    full_name: str | None = None


class DriftReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: DriftStatus
    unverifiable_fields: frozenset[str] = frozenset()
    message: str
    desired: dict[str, Any] = Field(default_factory=dict)
    actual: dict[str, Any] = Field(default_factory=dict)
    # Everything the read returned, compared or not.
    observed: dict[str, Any] = Field(default_factory=dict)

    @property
    def verified_fields(self) -> frozenset[str]:
        """Fields whose desired value was compared against a remote value."""
        return frozenset(self.actual) - self.unverifiable_fields
