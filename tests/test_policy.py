"""Tests for the pure decision functions."""

import pytest

from cachesave.core import Action, SaveContext
from cachesave.core.policy import (
    MISSING_TOKEN_MESSAGE,
    UPDATE_DISABLED_MESSAGE,
    check_eligible,
    decide,
    is_exact_key_match,
    resolve_primary_key,
)


def test_eligible_with_backend_and_ref() -> None:
    result = check_eligible(SaveContext(ref="refs/tags/v1", feature_available=True))
    assert result.eligible
    assert result.reason is None


def test_backend_check_runs_before_ref_check() -> None:
    result = check_eligible(SaveContext(ref=None, feature_available=False))
    assert not result.eligible
    assert "cache backend" in (result.reason or "")


def test_empty_ref_names_event() -> None:
    result = check_eligible(SaveContext(ref="", event_name="workflow_run"))
    assert not result.eligible
    assert "The event type workflow_run is not supported" in (result.reason or "")


@pytest.mark.parametrize(
    ("state_key", "input_key", "expected"),
    [
        ("restore-key", "input-key", "restore-key"),
        (None, "input-key", "input-key"),
        ("", "input-key", "input-key"),
        ("", "", None),
        (None, None, None),
    ],
)
def test_resolve_primary_key(state_key, input_key, expected) -> None:
    assert resolve_primary_key(state_key, input_key) == expected


def test_exact_match_is_case_sensitive() -> None:
    assert is_exact_key_match("Linux-abc", "Linux-abc")
    assert not is_exact_key_match("Linux-abc", "linux-abc")
    assert not is_exact_key_match("Linux-abc", None)
    assert not is_exact_key_match("Linux-abc", "")


def test_decide_miss_proceeds_fresh_regardless_of_update() -> None:
    assert decide("k", None, update=True, token="t").action is Action.PROCEED_FRESH
    assert decide("k", "other", update=False, token=None).action is Action.PROCEED_FRESH


def test_decide_hit_without_update() -> None:
    decision = decide("k", "k", update=False, token="t")
    assert decision.action is Action.SKIP
    assert decision.reason == UPDATE_DISABLED_MESSAGE


def test_decide_hit_with_update_needs_token() -> None:
    decision = decide("k", "k", update=True, token="")
    assert decision.action is Action.SKIP
    assert decision.reason == MISSING_TOKEN_MESSAGE


def test_decide_hit_with_update_and_token() -> None:
    assert decide("k", "k", update=True, token="t").action is Action.UPDATE
