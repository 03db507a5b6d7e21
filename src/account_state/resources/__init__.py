"""Schema ladders for every resource type with versioned state."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from account_state.ladder import SchemaLadder
from account_state.resources import (
    aws_account,
    aws_cnp_trust_policy,
    azure_exocompute,
    azure_service_principal,
    azure_subscription,
    gcp_project,
    gcp_service_account,
    role_assignment,
    sla_domain_assignment,
    user,
)

_RESOURCE_MODULES = (
    aws_account,
    aws_cnp_trust_policy,
    azure_exocompute,
    azure_service_principal,
    azure_subscription,
    gcp_project,
    gcp_service_account,
    role_assignment,
    sla_domain_assignment,
    user,
)


def build_ladders() -> Mapping[str, SchemaLadder]:
    """Build every resource ladder and return them as a read-only mapping."""
    ladders: dict[str, SchemaLadder] = {}
    for module in _RESOURCE_MODULES:
        ladder = module.build_ladder()
        if ladder.resource_type in ladders:
            raise ValueError(f"duplicate schema ladder for {ladder.resource_type}")
        ladders[ladder.resource_type] = ladder
    return MappingProxyType(ladders)


__all__ = ["build_ladders"]
