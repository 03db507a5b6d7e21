"""State ladder for ``polaris_azure_exocompute``."""

from __future__ import annotations

from typing import Any

from account_state.ladder import SchemaLadder, UpgradeContext, UpgradeStep

RESOURCE_TYPE = "polaris_azure_exocompute"


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Drop ``polaris_managed``; Azure exocompute is always service managed."""
    state.pop("polaris_managed", None)
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(RESOURCE_TYPE, [UpgradeStep(0, upgrade_v0, "remove polaris_managed")])
