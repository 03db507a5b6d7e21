"""State ladder for ``polaris_gcp_project``."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from account_state.ladder import SchemaLadder, UpgradeContext, UpgradeStep
from account_state.resources.common import (
    CloudAccountIdState,
    FeatureStatusBlock,
    cloud_native_protection_status,
    collapse_legacy_id,
    lookup_account,
)

RESOURCE_TYPE = "polaris_gcp_project"


class GcpProjectStateV2(CloudAccountIdState):
    cloud_native_protection: list[FeatureStatusBlock] = Field(min_length=1, max_length=1)


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Reduce ``<cloud account id>:<project id>`` to the cloud account id."""
    return collapse_legacy_id(context.require_service(), "gcp", state)


def upgrade_v1(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Introduce the cloud native protection block from the live feature status."""
    account = lookup_account(context.require_service(), "gcp", state)
    state["cloud_native_protection"] = [{"status": cloud_native_protection_status(account)}]
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [
            UpgradeStep(0, upgrade_v0, "reduce id to the cloud account id", CloudAccountIdState),
            UpgradeStep(1, upgrade_v1, "introduce cloud native protection block", GcpProjectStateV2),
        ],
    )
