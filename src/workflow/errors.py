"""Booking workflow error taxonomy.

Every error carries a user-facing ``message`` (shown as-is) and a short
``kind`` used in responses and logs.
"""


class BookingError(Exception):
    """Base class for failures reported to the user."""

    kind = "booking_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(BookingError):
    """Name, ID, phone, address or rate is malformed."""

    kind = "validation"

    def __init__(self, message: str, field_name: str = "") -> None:
        super().__init__(message)
        self.field_name = field_name


class AvailabilityError(BookingError):
    """Booking refused: no valid quote, or the date/slot cannot be booked."""

    kind = "availability"


class TransportError(BookingError):
    """The distance lookup failed."""

    kind = "transport"


class PersistenceError(BookingError):
    """The appointment could not be stored, or there is no session."""

    kind = "persistence"


class WorkflowBusyError(BookingError):
    """A quote or booking is already in flight."""

    kind = "busy"
