"""
Finite state machine for the quote-and-booking workflow.

Every submission follows a deterministic path through five states. A quote
is only usable while the machine sits in QUOTED; editing a trip input drops
it back to IDLE.

Usage:
    sm = BookingStateMachine()
    sm.transition(BookingTrigger.QUOTE_REQUESTED)
    assert sm.current_state == BookingState.QUOTING
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class BookingState(str, Enum):
    """All possible states of one booking cycle."""
    IDLE = "idle"
    QUOTING = "quoting"
    QUOTED = "quoted"
    BOOKING = "booking"
    BOOKED = "booked"


class BookingTrigger(str, Enum):
    """Events that cause state transitions."""
    QUOTE_REQUESTED = "quote_requested"
    DISTANCE_RESOLVED = "distance_resolved"
    DISTANCE_FAILED = "distance_failed"
    INPUTS_CHANGED = "inputs_changed"
    BOOK_REQUESTED = "book_requested"
    PERSIST_SUCCEEDED = "persist_succeeded"
    PERSIST_FAILED = "persist_failed"
    CYCLE_COMPLETE = "cycle_complete"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: BookingState
    to_state: BookingState
    trigger: BookingTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: BookingState
    entered_at: datetime
    trigger: Optional[BookingTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class BookingStateMachine:
    """Explicit transition table for quote, booking and invalidation."""

    TRANSITIONS: list[Transition] = [
        # --- Quoting ---
        Transition(BookingState.IDLE, BookingState.QUOTING,
                   BookingTrigger.QUOTE_REQUESTED),
        Transition(BookingState.QUOTED, BookingState.QUOTING,
                   BookingTrigger.QUOTE_REQUESTED),
        Transition(BookingState.QUOTING, BookingState.QUOTED,
                   BookingTrigger.DISTANCE_RESOLVED),
        Transition(BookingState.QUOTING, BookingState.IDLE,
                   BookingTrigger.DISTANCE_FAILED),

        # --- Invalidation ---
        Transition(BookingState.QUOTED, BookingState.IDLE,
                   BookingTrigger.INPUTS_CHANGED),

        # --- Booking ---
        Transition(BookingState.QUOTED, BookingState.BOOKING,
                   BookingTrigger.BOOK_REQUESTED),
        Transition(BookingState.BOOKING, BookingState.BOOKED,
                   BookingTrigger.PERSIST_SUCCEEDED),
        Transition(BookingState.BOOKING, BookingState.QUOTED,
                   BookingTrigger.PERSIST_FAILED),

        # --- Ready for the next submission ---
        Transition(BookingState.BOOKED, BookingState.IDLE,
                   BookingTrigger.CYCLE_COMPLETE),
    ]

    def __init__(self) -> None:
        self._current_state = BookingState.IDLE
        self._history: list[StateEntry] = [
            StateEntry(state=BookingState.IDLE, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> BookingState:
        return self._current_state

    @property
    def is_busy(self) -> bool:
        """True while a distance lookup or a save is in flight."""
        return self._current_state in (BookingState.QUOTING, BookingState.BOOKING)

    @property
    def has_valid_quote(self) -> bool:
        return self._current_state == BookingState.QUOTED

    def can(self, trigger: BookingTrigger) -> bool:
        return trigger in self.get_valid_triggers()

    def transition(self, trigger: BookingTrigger) -> BookingState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new workflow state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state
                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))
                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[BookingTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]
