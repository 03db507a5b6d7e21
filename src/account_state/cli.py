"""CLI helpers for identifier, fingerprint and state upgrade inspection."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from uuid import UUID

from account_state.errors import MalformedIdentifier
from account_state.executor import migrate_resource_state
from account_state.features import read_enabled_features
from account_state.fingerprint import feature_fingerprint
from account_state.identifiers import decode_composite_id, encode_composite_id
from account_state.ladder import SchemaLadder
from account_state.service import AccountService


def list_ladders(ladders: Mapping[str, SchemaLadder]) -> list[dict[str, Any]]:
    return [
        {
            "resource_type": name,
            "current_version": ladder.current_version,
            "steps": [step.description for step in ladder.steps],
        }
        for name, ladder in sorted(ladders.items())
    ]


def encode_id(key: str, account_id: str) -> str:
    try:
        parsed = UUID(account_id)
    except ValueError as exc:
        raise MalformedIdentifier(f"invalid account id: {account_id!r}") from exc
    return encode_composite_id(key, parsed)


def decode_id(value: str) -> dict[str, str]:
    decoded = decode_composite_id(value)
    return {"key": decoded.key, "account_id": str(decoded.account_id)}


def fingerprint_names(names: list[str]) -> dict[str, Any]:
    return {"id": feature_fingerprint(names), "features": sorted(set(names))}


def features_snapshot(service: AccountService) -> dict[str, Any]:
    snapshot = read_enabled_features(service)
    return {"id": snapshot.id, "features": snapshot.features}


def load_state(*, state_json: str | None, state_file: Path | None) -> dict[str, Any]:
    if state_file is not None:
        state_json = state_file.read_text(encoding="utf-8")
    if state_json is None:
        raise ValueError("state JSON is required")
    payload = json.loads(state_json)
    if not isinstance(payload, dict):
        raise ValueError("state JSON must decode to an object")
    return payload


def upgrade_state(
    ladders: Mapping[str, SchemaLadder],
    *,
    resource_type: str,
    stored_version: int,
    state: dict[str, Any],
    service: AccountService | None,
) -> dict[str, Any]:
    upgraded = migrate_resource_state(
        ladders, resource_type, stored_version, state, service=service
    )
    return {
        "resource_type": resource_type,
        "schema_version": ladders[resource_type].current_version,
        "state": upgraded,
    }
