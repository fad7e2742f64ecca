from src.workflow.errors import (
    AvailabilityError,
    BookingError,
    InputValidationError,
    PersistenceError,
    TransportError,
    WorkflowBusyError,
)
from src.workflow.state_machine import (
    BookingState,
    BookingStateMachine,
    BookingTrigger,
    InvalidTransitionError,
)

__all__ = [
    "BookingStateMachine",
    "BookingState",
    "BookingTrigger",
    "InvalidTransitionError",
    "BookingError",
    "InputValidationError",
    "AvailabilityError",
    "TransportError",
    "PersistenceError",
    "WorkflowBusyError",
]
