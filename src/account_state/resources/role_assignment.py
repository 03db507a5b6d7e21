"""State ladder for ``polaris_role_assignment``."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from account_state.identifiers import sha256_id
from account_state.ladder import SchemaLadder, StateSchema, UpgradeContext, UpgradeStep
from account_state.resources.common import require_str

RESOURCE_TYPE = "polaris_role_assignment"


class RoleAssignmentStateV1(StateSchema):
    id: str = Field(min_length=1)


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Replace the hash of email and role id with the user id."""
    email = require_str(state, "user_email")
    role_id = require_str(state, "role_id")
    resource_id = state.get("id")
    if resource_id != sha256_id(email, role_id):
        raise ValueError(f"unexpected role assignment resource id: {resource_id}")

    user = context.require_service().user_by_email(email)
    state["id"] = user.id
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [UpgradeStep(0, upgrade_v0, "use the user id as resource id", RoleAssignmentStateV1)],
    )
