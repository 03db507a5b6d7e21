"""Typed contracts for the account-management collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal
from uuid import UUID

Cloud = Literal["aws", "azure", "gcp"]

FEATURE_CLOUD_NATIVE_PROTECTION = "CLOUD_NATIVE_PROTECTION"
FEATURE_EXOCOMPUTE = "EXOCOMPUTE"


@dataclass(frozen=True)
class CloudAccount:
    id: UUID
    native_id: str
    name: str = ""
    features: dict[str, str] = field(default_factory=dict)

    def feature_status(self, name: str) -> str | None:
        """Return the status of an onboarded feature, or None if absent."""
        return self.features.get(name)


@dataclass(frozen=True)
class User:
    id: str
    email: str


@dataclass(frozen=True)
class FeaturesSnapshot:
    id: str
    features: list[str]
