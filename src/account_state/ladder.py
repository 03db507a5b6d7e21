"""Schema version ladders for persisted resource state.

A ladder is an ordered, immutable chain of upgrade steps. The step registered
for version ``N`` turns a state record written under schema ``N`` into one
valid under schema ``N + 1``; the ladder's current version is one past the
last step. Ladders are built explicitly and checked for gaps when constructed.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from account_state.audit import log_structured_event
from account_state.errors import (
    AccountServiceUnavailableError,
    InvalidStoredVersion,
    LadderGap,
    StepFailure,
    UnsupportedFutureVersion,
)
from account_state.service import AccountService


class StateSchema(BaseModel):
    """Shape assertions for a state record at one schema version.

    Only the fields a version introduces or reshapes are declared; any other
    attribute in the record is allowed through.
    """

    model_config = ConfigDict(extra="allow")


@dataclass(frozen=True)
class UpgradeContext:
    resource_type: str
    service: AccountService | None = None

    def require_service(self) -> AccountService:
        if self.service is None:
            raise AccountServiceUnavailableError(
                f"upgrading {self.resource_type} state requires the account service"
            )
        return self.service


UpgradeFunc = Callable[[dict[str, Any], UpgradeContext], dict[str, Any]]


@dataclass(frozen=True)
class UpgradeStep:
    from_version: int
    upgrade: UpgradeFunc
    description: str = ""
    target_schema: type[StateSchema] | None = None

    @property
    def to_version(self) -> int:
        return self.from_version + 1


class SchemaLadder:
    """Immutable ordered chain of upgrade steps for one resource type."""

    def __init__(self, resource_type: str, steps: Sequence[UpgradeStep]) -> None:
        ordered = sorted(steps, key=lambda step: step.from_version)
        for expected, step in enumerate(ordered):
            if step.from_version != expected:
                raise LadderGap(
                    f"{resource_type} ladder has no step for version {expected} "
                    f"(found version {step.from_version})"
                )
        self._resource_type = resource_type
        self._steps: tuple[UpgradeStep, ...] = tuple(ordered)

    @property
    def resource_type(self) -> str:
        return self._resource_type

    @property
    def steps(self) -> tuple[UpgradeStep, ...]:
        return self._steps

    @property
    def current_version(self) -> int:
        return len(self._steps)

    def step_for(self, version: int) -> UpgradeStep:
        if 0 <= version < len(self._steps):
            step = self._steps[version]
            if step.from_version == version:
                return step
        raise LadderGap(f"{self._resource_type} ladder has no step for version {version}")

    def check_version(self, stored_version: int) -> None:
        """Reject stored versions this ladder cannot upgrade from."""
        if isinstance(stored_version, bool) or not isinstance(stored_version, int):
            raise InvalidStoredVersion(
                f"{self._resource_type} stored schema version must be an integer, "
                f"got {stored_version!r}"
            )
        if stored_version < 0:
            raise InvalidStoredVersion(
                f"{self._resource_type} stored schema version must be >= 0, got {stored_version}"
            )
        if stored_version > self.current_version:
            raise UnsupportedFutureVersion(
                self._resource_type, stored_version, self.current_version
            )

    def upgrade(
        self,
        record: Mapping[str, Any],
        from_version: int,
        context: UpgradeContext | None = None,
    ) -> dict[str, Any]:
        """Carry ``record`` from ``from_version`` to the current version.

        The input is deep-copied before the first step runs, so a failure
        leaves the caller's record untouched and no partial result escapes.
        A record from a newer schema is rejected, never returned as current.
        """
        self.check_version(from_version)
        if context is None:
            context = UpgradeContext(resource_type=self._resource_type)
        state = copy.deepcopy(dict(record))
        version = from_version
        while version < self.current_version:
            step = self.step_for(version)
            log_structured_event(
                "state_upgrade_step",
                resource_type=self._resource_type,
                from_version=version,
                to_version=step.to_version,
            )
            state = self._apply(step, state, context)
            version = step.to_version
        return state

    def _apply(
        self, step: UpgradeStep, state: dict[str, Any], context: UpgradeContext
    ) -> dict[str, Any]:
        try:
            upgraded = step.upgrade(state, context)
            if not isinstance(upgraded, dict):
                raise TypeError(
                    f"upgrade step returned {type(upgraded).__name__}, expected dict"
                )
            if step.target_schema is not None:
                step.target_schema.model_validate(upgraded)
        except StepFailure:
            raise
        except Exception as exc:
            raise StepFailure(self._resource_type, step.from_version, exc) from exc
        return upgraded
