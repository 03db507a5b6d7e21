"""State ladder for ``polaris_azure_service_principal``.

Version 1 made ``tenant_domain`` required. It was only ever missing when the
principal was given as a credentials file, so the upgrade reads it from there.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import Field

from account_state.ladder import SchemaLadder, StateSchema, UpgradeContext, UpgradeStep

RESOURCE_TYPE = "polaris_azure_service_principal"


class ServicePrincipalStateV1(StateSchema):
    tenant_domain: str = Field(min_length=1)


def _tenant_domain_from_file(credentials: str) -> str:
    payload = json.loads(Path(credentials).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("credentials file must contain a JSON object")
    # Older credentials files use snake case, newer ones camel case.
    for key in ("tenant_domain", "tenantDomain"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    raise ValueError("credentials file does not contain tenant domain")


def upgrade_v0(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
    credentials = state.get("credentials")
    if not credentials:
        return state
    state["tenant_domain"] = _tenant_domain_from_file(credentials)
    return state


def build_ladder() -> SchemaLadder:
    return SchemaLadder(
        RESOURCE_TYPE,
        [UpgradeStep(0, upgrade_v0, "backfill tenant_domain", ServicePrincipalStateV1)],
    )
