"""Tests for the booking state machine."""

import pytest

from src.workflow.state_machine import (
    BookingState,
    BookingStateMachine,
    BookingTrigger,
    InvalidTransitionError,
)


def _to_quoted(sm: BookingStateMachine) -> None:
    sm.transition(BookingTrigger.QUOTE_REQUESTED)
    sm.transition(BookingTrigger.DISTANCE_RESOLVED)


class TestInitialState:
    def test_starts_idle(self, state_machine):
        assert state_machine.current_state == BookingState.IDLE

    def test_initial_history_has_one_entry(self, state_machine):
        assert len(state_machine.get_history()) == 1

    def test_no_quote_at_start(self, state_machine):
        assert not state_machine.has_valid_quote
        assert not state_machine.is_busy


class TestQuoting:
    def test_quote_request_from_idle(self, state_machine):
        new = state_machine.transition(BookingTrigger.QUOTE_REQUESTED)
        assert new == BookingState.QUOTING
        assert state_machine.is_busy

    def test_distance_resolved_to_quoted(self, state_machine):
        _to_quoted(state_machine)
        assert state_machine.has_valid_quote

    def test_distance_failed_back_to_idle(self, state_machine):
        state_machine.transition(BookingTrigger.QUOTE_REQUESTED)
        new = state_machine.transition(BookingTrigger.DISTANCE_FAILED)
        assert new == BookingState.IDLE

    def test_requote_from_quoted(self, state_machine):
        _to_quoted(state_machine)
        new = state_machine.transition(BookingTrigger.QUOTE_REQUESTED)
        assert new == BookingState.QUOTING

    def test_quote_request_while_quoting_rejected(self, state_machine):
        state_machine.transition(BookingTrigger.QUOTE_REQUESTED)
        with pytest.raises(InvalidTransitionError):
            state_machine.transition(BookingTrigger.QUOTE_REQUESTED)


class TestInvalidation:
    def test_inputs_changed_drops_quote(self, state_machine):
        _to_quoted(state_machine)
        new = state_machine.transition(BookingTrigger.INPUTS_CHANGED)
        assert new == BookingState.IDLE
        assert not state_machine.has_valid_quote


class TestBooking:
    def test_book_requires_quote(self, state_machine):
        with pytest.raises(InvalidTransitionError, match="book_requested"):
            state_machine.transition(BookingTrigger.BOOK_REQUESTED)

    def test_book_from_quoted(self, state_machine):
        _to_quoted(state_machine)
        assert state_machine.transition(BookingTrigger.BOOK_REQUESTED) == BookingState.BOOKING

    def test_persist_failure_returns_to_quoted(self, state_machine):
        _to_quoted(state_machine)
        state_machine.transition(BookingTrigger.BOOK_REQUESTED)
        new = state_machine.transition(BookingTrigger.PERSIST_FAILED)
        assert new == BookingState.QUOTED

    def test_success_then_new_cycle(self, state_machine):
        _to_quoted(state_machine)
        state_machine.transition(BookingTrigger.BOOK_REQUESTED)
        assert state_machine.transition(BookingTrigger.PERSIST_SUCCEEDED) == BookingState.BOOKED
        assert state_machine.transition(BookingTrigger.CYCLE_COMPLETE) == BookingState.IDLE

    def test_inputs_cannot_change_while_booking(self, state_machine):
        _to_quoted(state_machine)
        state_machine.transition(BookingTrigger.BOOK_REQUESTED)
        assert not state_machine.can(BookingTrigger.INPUTS_CHANGED)


class TestHistory:
    def test_state_trace(self, state_machine):
        _to_quoted(state_machine)
        state_machine.transition(BookingTrigger.INPUTS_CHANGED)
        assert state_machine.get_state_trace() == ["idle", "quoting", "quoted", "idle"]

    def test_history_records_trigger(self, state_machine):
        state_machine.transition(BookingTrigger.QUOTE_REQUESTED)
        assert state_machine.get_history()[-1].trigger == BookingTrigger.QUOTE_REQUESTED

    def test_error_lists_valid_triggers(self, state_machine):
        with pytest.raises(InvalidTransitionError, match="quote_requested"):
            state_machine.transition(BookingTrigger.PERSIST_SUCCEEDED)
