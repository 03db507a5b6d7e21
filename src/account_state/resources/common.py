"""Shared state shapes and helpers for resource upgrade steps."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from account_state.identifiers import (
    CANONICAL_UUID_PATTERN,
    parse_account_id,
    split_legacy_account_id,
)
from account_state.ladder import StateSchema
from account_state.service import AccountService
from account_state.types import FEATURE_CLOUD_NATIVE_PROTECTION, Cloud, CloudAccount


class FeatureStatusBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str = Field(min_length=1)


class RegionalFeatureBlock(FeatureStatusBlock):
    regions: list[str]


class CloudAccountIdState(StateSchema):
    """State whose id is the bare cloud account UUID."""

    id: str = Field(pattern=CANONICAL_UUID_PATTERN)


def require_str(state: dict[str, Any], key: str) -> str:
    value = state.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"state attribute {key!r} must be a non-empty string")
    return value


def lookup_account(service: AccountService, cloud: Cloud, state: dict[str, Any]) -> CloudAccount:
    return service.cloud_account(cloud, parse_account_id(state.get("id")))


def collapse_legacy_id(service: AccountService, cloud: Cloud, state: dict[str, Any]) -> dict[str, Any]:
    """Replace a ``<uuid>:<native id>`` id with the bare cloud account id.

    Both halves are resolved against the account service and must refer to
    the same cloud account.
    """
    account_id, native_id = split_legacy_account_id(state.get("id"))
    by_account_id = service.cloud_account(cloud, account_id)
    by_native_id = service.cloud_account_by_native_id(cloud, native_id)
    if by_account_id.id != by_native_id.id:
        raise ValueError("v0 id refers to two different accounts")
    state["id"] = str(by_account_id.id)
    return state


def cloud_native_protection_status(account: CloudAccount) -> str:
    status = account.feature_status(FEATURE_CLOUD_NATIVE_PROTECTION)
    if status is None:
        raise ValueError(f"cloud account {account.id} is missing cloud native protection")
    return status
