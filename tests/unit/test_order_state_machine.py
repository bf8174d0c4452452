"""Unit tests for the Order status state machine helpers."""

from __future__ import annotations

import pytest

from modules.orders.constants import (
    CANCELLABLE_STATES,
    TERMINAL_STATES,
    TRACKED_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
)
from modules.orders.models import Order

pytestmark = pytest.mark.unit


class TestTransitionTable:
    def test_every_status_has_an_entry(self):
        assert set(VALID_TRANSITIONS) == set(OrderStatus.values)

    def test_terminal_states_have_no_exits(self):
        for status in TERMINAL_STATES:
            assert VALID_TRANSITIONS[status] == set()

    def test_cancellable_states(self):
        assert CANCELLABLE_STATES == {OrderStatus.PENDING, OrderStatus.CONFIRMED}

    def test_pending_is_not_tracked_from_confirmation(self):
        assert OrderStatus.PENDING not in TRACKED_STATES
        assert OrderStatus.CANCELLED not in TRACKED_STATES


class TestModelHelpers:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.CONFIRMED, OrderStatus.PROCESSING),
            (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
            (OrderStatus.PROCESSING, OrderStatus.COMPLETED),
        ],
    )
    def test_valid_transitions(self, current, target):
        assert Order(status=current).can_transition_to(target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.COMPLETED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
            (OrderStatus.COMPLETED, OrderStatus.PENDING),
            (OrderStatus.CANCELLED, OrderStatus.CONFIRMED),
        ],
    )
    def test_invalid_transitions(self, current, target):
        assert not Order(status=current).can_transition_to(target)

    @pytest.mark.parametrize("status", list(OrderStatus.values))
    def test_is_terminal(self, status):
        assert Order(status=status).is_terminal is (status in TERMINAL_STATES)
