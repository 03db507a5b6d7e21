"""State ladder for ``polaris_aws_cnp_account_trust_policy``.

Version 0 used the cloud account id as resource id, which let two trust
policies for different roles of the same account collide. Version 1 ids are
composite ``<role key>:<cloud account id>`` identifiers.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from account_state.errors import MalformedIdentifier
from account_state.identifiers import decode_composite_id, encode_composite_id, parse_account_id
from account_state.ladder import SchemaLadder, StateSchema, UpgradeContext, UpgradeStep
from account_state.resources.common import require_str

RESOURCE_TYPE = "polaris_aws_cnp_account_trust_policy"


class TrustPolicyStateV1(StateSchema):
    id: str
    role_key: str

    @field_validator("id")
    @classmethod
    def _composite_id(cls, value: str) -> str:
        try:
            decode_composite_id(value)
        except MalformedIdentifier as exc:
            raise ValueError(str(exc)) from exc
        return value


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    account_id = parse_account_id(state.get("id"))
    state["id"] = encode_composite_id(require_str(state, "role_key"), account_id)
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [UpgradeStep(0, upgrade_v0, "include the role key in the id", TrustPolicyStateV1)],
    )
