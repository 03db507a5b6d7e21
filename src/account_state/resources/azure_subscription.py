"""State ladder for ``polaris_azure_subscription``."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from account_state.identifiers import parse_account_id
from account_state.ladder import SchemaLadder, UpgradeContext, UpgradeStep
from account_state.resources.common import (
    CloudAccountIdState,
    RegionalFeatureBlock,
    cloud_native_protection_status,
    lookup_account,
)

RESOURCE_TYPE = "polaris_azure_subscription"


class AzureSubscriptionStateV1(CloudAccountIdState):
    regions: list[str]


class AzureSubscriptionStateV2(CloudAccountIdState):
    cloud_native_protection: list[RegionalFeatureBlock] = Field(min_length=1, max_length=1)


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Replace the Azure subscription id with the cloud account id."""
    subscription_id = parse_account_id(state.get("id"))
    account = context.require_service().cloud_account_by_native_id("azure", str(subscription_id))
    state["id"] = str(account.id)
    return state


def upgrade_v1(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Introduce the cloud native protection block; it takes over the regions."""
    account = lookup_account(context.require_service(), "azure", state)
    state["cloud_native_protection"] = [
        {
            "regions": state.pop("regions", None),
            "status": cloud_native_protection_status(account),
        }
    ]
    return state


def upgrade_v2(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    # Version 3 only changed configuration validation.
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [
            UpgradeStep(0, upgrade_v0, "migrate id to the cloud account id", AzureSubscriptionStateV1),
            UpgradeStep(1, upgrade_v1, "introduce cloud native protection block", AzureSubscriptionStateV2),
            UpgradeStep(2, upgrade_v2, "no state change", AzureSubscriptionStateV2),
        ],
    )
