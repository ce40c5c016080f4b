"""Tests for project and calculation status transitions."""

import pytest

from app.core.exceptions import BadRequestError
from app.core.workflow import CALCULATION_TRANSITIONS, ensure_transition


@pytest.mark.parametrize(
    "current,target",
    [
        ("draft", "active"),
        ("draft", "archived"),
        ("active", "completed"),
        ("active", "draft"),
        ("completed", "active"),
        ("archived", "draft"),
    ],
)
def test_allowed_project_transitions(current, target):
    assert ensure_transition(current, target) == target


@pytest.mark.parametrize(
    "current,target",
    [("draft", "completed"), ("archived", "active"), ("completed", "draft")],
)
def test_rejected_project_transitions(current, target):
    with pytest.raises(BadRequestError) as exc_info:
        ensure_transition(current, target)

    assert exc_info.value.detail == f"Cannot change status from {current} to {target}"


def test_same_status_is_allowed():
    assert ensure_transition("archived", "archived") == "archived"


class TestCalculationTransitions:
    """Tests for the calculation review workflow."""

    def test_forward_path(self):
        status = "draft"
        for target in ("calculated", "verified", "approved"):
            status = ensure_transition(status, target, CALCULATION_TRANSITIONS)

        assert status == "approved"

    def test_approved_is_final(self):
        with pytest.raises(BadRequestError):
            ensure_transition("approved", "verified", CALCULATION_TRANSITIONS)

    def test_cannot_skip_review(self):
        with pytest.raises(BadRequestError):
            ensure_transition("calculated", "approved", CALCULATION_TRANSITIONS)
