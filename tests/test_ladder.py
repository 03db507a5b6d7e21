import json
import logging
from typing import Any

import pytest
from pydantic import Field, ValidationError

from account_state.errors import (
    AccountServiceUnavailableError,
    InvalidStoredVersion,
    LadderGap,
    StepFailure,
    UnsupportedFutureVersion,
)
from account_state.ladder import SchemaLadder, StateSchema, UpgradeContext, UpgradeStep


def _append(tag: str):
    def _step(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
        state.setdefault("history", []).append(tag)
        return state

    return _step


class _TaggedState(StateSchema):
    history: list[str] = Field(min_length=1)


def test_ladder_rejects_gaps_at_construction() -> None:
    with pytest.raises(LadderGap, match="no step for version 1"):
        SchemaLadder("example", [UpgradeStep(0, _append("a")), UpgradeStep(2, _append("c"))])


def test_ladder_rejects_duplicates_and_missing_base() -> None:
    with pytest.raises(LadderGap):
        SchemaLadder("example", [UpgradeStep(0, _append("a")), UpgradeStep(0, _append("b"))])
    with pytest.raises(LadderGap):
        SchemaLadder("example", [UpgradeStep(1, _append("b"))])


def test_ladder_orders_steps_and_reports_current_version() -> None:
    ladder = SchemaLadder(
        "example",
        [UpgradeStep(2, _append("c")), UpgradeStep(0, _append("a")), UpgradeStep(1, _append("b"))],
    )

    assert ladder.current_version == 3
    assert [step.from_version for step in ladder.steps] == [0, 1, 2]
    assert ladder.upgrade({}, 0)["history"] == ["a", "b", "c"]
    assert ladder.upgrade({"history": ["a"]}, 1)["history"] == ["a", "b", "c"]


def test_empty_ladder_is_at_version_zero() -> None:
    ladder = SchemaLadder("example", [])

    assert ladder.current_version == 0
    assert ladder.upgrade({"id": "x"}, 0) == {"id": "x"}


def test_step_for_unknown_version_is_a_gap() -> None:
    ladder = SchemaLadder("example", [UpgradeStep(0, _append("a"))])

    with pytest.raises(LadderGap):
        ladder.step_for(1)
    with pytest.raises(LadderGap):
        ladder.step_for(-1)


def test_upgrade_never_mutates_the_input_record() -> None:
    ladder = SchemaLadder("example", [UpgradeStep(0, _append("a"))])
    record = {"history": ["seed"], "nested": {"keep": True}}

    upgraded = ladder.upgrade(record, 0)

    assert upgraded["history"] == ["seed", "a"]
    assert record == {"history": ["seed"], "nested": {"keep": True}}


def test_step_exception_is_wrapped_with_original_cause() -> None:
    cause = ValueError("boom")

    def _fail(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
        state["partial"] = True
        raise cause

    ladder = SchemaLadder("example", [UpgradeStep(0, _append("a")), UpgradeStep(1, _fail)])
    record = {"id": "x"}

    with pytest.raises(StepFailure) as exc_info:
        ladder.upgrade(record, 0)

    assert exc_info.value.cause is cause
    assert exc_info.value.from_version == 1
    assert exc_info.value.resource_type == "example"
    assert record == {"id": "x"}


def test_schema_violation_is_a_step_failure() -> None:
    def _noop(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
        return state

    ladder = SchemaLadder("example", [UpgradeStep(0, _noop, target_schema=_TaggedState)])

    with pytest.raises(StepFailure) as exc_info:
        ladder.upgrade({"id": "x"}, 0)

    assert isinstance(exc_info.value.cause, ValidationError)


def test_step_must_return_a_mapping() -> None:
    def _bad(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
        return None  # type: ignore[return-value]

    ladder = SchemaLadder("example", [UpgradeStep(0, _bad)])

    with pytest.raises(StepFailure) as exc_info:
        ladder.upgrade({}, 0)

    assert isinstance(exc_info.value.cause, TypeError)


def test_step_requiring_service_fails_without_one() -> None:
    def _needs_service(state: dict[str, Any], context: UpgradeContext) -> dict[str, Any]:
        context.require_service()
        return state

    ladder = SchemaLadder("example", [UpgradeStep(0, _needs_service)])

    with pytest.raises(StepFailure) as exc_info:
        ladder.upgrade({}, 0)

    assert isinstance(exc_info.value.cause, AccountServiceUnavailableError)


def test_upgrade_rejects_records_from_a_newer_schema() -> None:
    ladder = SchemaLadder("example", [UpgradeStep(0, _append("a"))])

    with pytest.raises(UnsupportedFutureVersion) as exc_info:
        ladder.upgrade({"id": 1}, 5)

    assert exc_info.value.stored_version == 5
    assert exc_info.value.current_version == 1


def test_upgrade_rejects_negative_and_non_integer_versions() -> None:
    ladder = SchemaLadder("example", [UpgradeStep(0, _append("a"))])

    with pytest.raises(InvalidStoredVersion):
        ladder.upgrade({}, -1)
    with pytest.raises(InvalidStoredVersion):
        ladder.upgrade({}, True)  # type: ignore[arg-type]
    with pytest.raises(InvalidStoredVersion):
        ladder.upgrade({}, "0")  # type: ignore[arg-type]


def test_upgrade_at_current_version_returns_an_equal_copy() -> None:
    ladder = SchemaLadder("example", [UpgradeStep(0, _append("a"))])
    record = {"history": ["a"]}

    upgraded = ladder.upgrade(record, 1)

    assert upgraded == record
    assert upgraded is not record


def test_upgrade_logs_one_event_per_step(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="account_state.audit")
    ladder = SchemaLadder(
        "example",
        [UpgradeStep(0, _append("a")), UpgradeStep(1, _append("b")), UpgradeStep(2, _append("c"))],
    )

    ladder.upgrade({"token": "secret-value"}, 1)

    steps = [
        json.loads(record.getMessage())
        for record in caplog.records
        if "state_upgrade_step" in record.getMessage()
    ]
    assert steps == [
        {"event_type": "state_upgrade_step", "from_version": 1, "resource_type": "example", "to_version": 2},
        {"event_type": "state_upgrade_step", "from_version": 2, "resource_type": "example", "to_version": 3},
    ]
    assert not any("secret-value" in record.getMessage() for record in caplog.records)
