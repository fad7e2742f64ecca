"""Shared test fixtures and helpers."""

import random
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from src.schemas.booking_schema import Appointment, Customer, Quote, TripRequest
from src.schemas.session_schema import SessionContext
from src.tools.distance import SimulatedDistanceService
from src.tools.persistence import InMemoryAppointmentStore
from src.workflow.booking_form import BookingForm
from src.workflow.booking_service import BookingService
from src.workflow.state_machine import BookingStateMachine

# Monday
TODAY = date(2026, 10, 19)
WEDNESDAY = date(2026, 10, 21)
SATURDAY = date(2026, 10, 24)

VALID_CPF = "529.982.247-25"


class RecordingRenderer:
    """Renderer that records every call for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def _record(self, *call) -> None:
        self.calls.append(call)

    def set_busy(self, action: str, busy: bool) -> None:
        self._record("set_busy", action, busy)

    def show_validation_error(self, field_name: str, message: str) -> None:
        self._record("validation", field_name, message)

    def show_notice(self, message: str) -> None:
        self._record("notice", message)

    def show_quote(self, distance_display: str, price_display: str) -> None:
        self._record("quote", distance_display, price_display)

    def hide_quote(self) -> None:
        self._record("hide_quote")

    def show_success(self, message: str) -> None:
        self._record("success", message)

    def open_link(self, url: str) -> None:
        self._record("open_link", url)

    def of(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def state_machine():
    return BookingStateMachine()


@pytest.fixture
def booking_form():
    return BookingForm()


@pytest.fixture
def store():
    return InMemoryAppointmentStore()


@pytest.fixture
def session():
    return SessionContext(app_id="test-app", session_id="user-123")


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def distance():
    return SimulatedDistanceService(delay_sec=0, rng=random.Random(7))


@pytest.fixture
def service(distance, store, session, renderer):
    return BookingService(
        distance=distance,
        persistence=store,
        session=session,
        renderer=renderer,
        today=lambda: TODAY,
    )


def fill_form(
    form: BookingForm,
    booking_date: Optional[date] = None,
    booking_time: str = "09:00",
    **overrides: str,
) -> None:
    """Fill every field with the Maria Silva trip unless overridden."""
    values = {
        "full_name": "Maria Silva",
        "cpf": VALID_CPF,
        "phone": "(11) 91234-5678",
        "start_address": "Rua A",
        "destination": "Rua B",
        "rate_per_km": "2.00",
    }
    values.update(overrides)
    for name, value in values.items():
        form.set_field(name, value)
    if booking_date is not None:
        form.set_field("booking_date", booking_date.isoformat())
    form.set_field("booking_time", booking_time)


def make_appointment(record_id: Optional[str] = "abc123", **overrides) -> Appointment:
    """Helper to create an Appointment with sensible defaults."""
    trip = TripRequest(start_address="Rua A", destination="Rua B", rate_per_km=Decimal("2.00"))
    fields = dict(
        customer=Customer(full_name="Maria Silva", cpf=VALID_CPF, phone="(11) 91234-5678"),
        trip=trip,
        booking_date=WEDNESDAY,
        slot="09:00",
        quote=Quote(trip=trip, distance=Decimal(23), price=Decimal("56.00")),
        session_id="user-123",
        record_id=record_id,
    )
    fields.update(overrides)
    return Appointment(**fields)
