"""State ladder for ``polaris_user``."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from account_state.ladder import SchemaLadder, StateSchema, UpgradeContext, UpgradeStep
from account_state.resources.common import require_str

RESOURCE_TYPE = "polaris_user"


class UserStateV1(StateSchema):
    id: str = Field(min_length=1)


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    """Replace the email address id with the user id."""
    email = require_str(state, "email")
    if state.get("id") != email:
        raise ValueError(
            f"unexpected mismatch between user id and email address: {state.get('id')} != {email}"
        )
    state["id"] = context.require_service().user_by_email(email).id
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [UpgradeStep(0, upgrade_v0, "use the user id as resource id", UserStateV1)],
    )
