"""State ladder for ``polaris_sla_domain_assignment``."""

from __future__ import annotations

from typing import Any, Literal

from account_state.ladder import SchemaLadder, StateSchema, UpgradeContext, UpgradeStep

RESOURCE_TYPE = "polaris_sla_domain_assignment"

PROTECT_WITH_SLA = "protectWithSlaId"
DO_NOT_PROTECT = "doNotProtect"


class SlaDomainAssignmentStateV1(StateSchema):
    assignment_type: Literal["protectWithSlaId", "doNotProtect"]
    apply_changes_to_existing_snapshots: bool
    apply_changes_to_non_policy_snapshots: bool


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Add the assignment options introduced in version 1 with their defaults.

    Version 0 could only protect objects with an SLA domain.
    """
    state["assignment_type"] = PROTECT_WITH_SLA
    state["apply_changes_to_existing_snapshots"] = True
    state["apply_changes_to_non_policy_snapshots"] = False
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [UpgradeStep(0, upgrade_v0, "add assignment options", SlaDomainAssignmentStateV1)],
    )
