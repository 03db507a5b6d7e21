"""State ladder for ``polaris_aws_account``.

Version 0 ids were ``<cloud account id>:<aws account id>``. Version 1 reduced
the id to the cloud account id. Version 2 moved the monitored regions into a
``cloud_native_protection`` block and added feature status to both feature
blocks.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from account_state.ladder import SchemaLadder, UpgradeContext, UpgradeStep
from account_state.resources.common import (
    CloudAccountIdState,
    RegionalFeatureBlock,
    cloud_native_protection_status,
    collapse_legacy_id,
    lookup_account,
)
from account_state.types import FEATURE_EXOCOMPUTE

RESOURCE_TYPE = "polaris_aws_account"


class AwsAccountStateV1(CloudAccountIdState):
    regions: list[str]


class AwsAccountStateV2(CloudAccountIdState):
    cloud_native_protection: list[RegionalFeatureBlock] = Field(min_length=1, max_length=1)
    exocompute: list[dict[str, Any]] = Field(default_factory=list, max_length=1)


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    return collapse_legacy_id(context.require_service(), "aws", state)


def upgrade_v1(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    account = lookup_account(context.require_service(), "aws", state)

    exocompute = state.get("exocompute")
    if exocompute:
        status = account.feature_status(FEATURE_EXOCOMPUTE)
        if status is not None:
            exocompute[0]["status"] = status

    # The new block takes ownership of the account's regions.
    state["cloud_native_protection"] = [
        {
            "regions": state.pop("regions", None),
            "status": cloud_native_protection_status(account),
        }
    ]
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [
            UpgradeStep(0, upgrade_v0, "reduce id to the cloud account id", AwsAccountStateV1),
            UpgradeStep(1, upgrade_v1, "introduce cloud native protection block", AwsAccountStateV2),
        ],
    )
