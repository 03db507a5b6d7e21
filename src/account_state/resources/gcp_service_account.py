"""State ladder for ``polaris_gcp_service_account``."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from account_state.fingerprint import sha256_text
from account_state.ladder import SchemaLadder, StateSchema, UpgradeContext, UpgradeStep

RESOURCE_TYPE = "polaris_gcp_service_account"


class GcpServiceAccountStateV1(StateSchema):
    id: str = Field(pattern=r"^[0-9a-f]{64}$")


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Use the SHA-256 of the service account name as resource id."""
    name = context.require_service().gcp_service_account()
    state["id"] = sha256_text(name)
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [UpgradeStep(0, upgrade_v0, "hash the service account name", GcpServiceAccountStateV1)],
    )
