"""Migration executor for persisted resource state."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from account_state.audit import log_structured_event
from account_state.errors import StateMigrationError, UnknownResourceType
from account_state.ladder import SchemaLadder, UpgradeContext
from account_state.service import AccountService


@dataclass(frozen=True)
class MigrationExecutor:
    ladder: SchemaLadder
    service: AccountService | None = None

    def run(self, stored_version: int, record: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``record`` upgraded from ``stored_version`` to the current version.

        Records already at the current version are passed through unchanged.
        Records from a newer schema are rejected rather than downgraded.
        """
        resource_type = self.ladder.resource_type
        current_version = self.ladder.current_version
        self.ladder.check_version(stored_version)
        if stored_version == current_version:
            return dict(record)

        log_structured_event(
            "state_upgrade_started",
            resource_type=resource_type,
            from_version=stored_version,
            to_version=current_version,
        )
        context = UpgradeContext(resource_type=resource_type, service=self.service)
        try:
            upgraded = self.ladder.upgrade(record, stored_version, context)
        except StateMigrationError as exc:
            log_structured_event(
                "state_upgrade_failed",
                level=logging.ERROR,
                resource_type=resource_type,
                from_version=stored_version,
                error=type(exc).__name__,
            )
            raise
        log_structured_event(
            "state_upgrade_finished",
            resource_type=resource_type,
            from_version=stored_version,
            to_version=current_version,
        )
        return upgraded


def migrate_resource_state(
    ladders: Mapping[str, SchemaLadder],
    resource_type: str,
    stored_version: int,
    record: Mapping[str, Any],
    *,
    service: AccountService | None = None,
) -> dict[str, Any]:
    ladder = ladders.get(resource_type)
    if ladder is None:
        raise UnknownResourceType(f"no schema ladder registered for {resource_type!r}")
    return MigrationExecutor(ladder=ladder, service=service).run(stored_version, record)
