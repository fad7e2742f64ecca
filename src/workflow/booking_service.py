"""
Booking service: quote, confirm, persist and hand off to the driver.

Implements the full submission lifecycle on top of BookingStateMachine:
Validate -> Quote -> Book -> Persist -> Deep link. Every failure is turned
into a user-facing report through the injected renderer, and controls are
re-enabled on every path so the user can correct input or retry.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable, Optional

from src.logging_context import bind_session, get_session_logger
from src.messages.deep_link import build_deep_link
from src.messages.formatting import format_distance, format_price
from src.rules.pricing import quote_price
from src.rules.scheduler import earliest_selectable_date, enumerate_slots, is_bookable_date
from src.schemas.booking_schema import (
    Appointment,
    BookingResponse,
    Customer,
    Quote,
    QuoteResponse,
    TripRequest,
)
from src.schemas.session_schema import SessionContext
from src.tools.distance import DistancePort, SimulatedDistanceService
from src.tools.persistence import InMemoryAppointmentStore, PersistencePort
from src.workflow.booking_form import FORM_LOCKED, BookingForm
from src.workflow.errors import (
    AvailabilityError,
    BookingError,
    InputValidationError,
    PersistenceError,
    TransportError,
    WorkflowBusyError,
)
from src.workflow.ports import LoggingRenderer, OutputRenderer
from src.workflow.state_machine import BookingState, BookingStateMachine, BookingTrigger

logger = get_session_logger(__name__)

QUOTE_REQUIRED = "Por favor, consulte o valor antes de agendar."
DATE_REQUIRED = "Por favor, selecione uma data para a viagem."
WEEKEND_UNAVAILABLE = "Agendamentos não disponíveis aos sábados e domingos."
DATE_IN_PAST = "Por favor, selecione uma data a partir de hoje."
SLOT_UNAVAILABLE = "Horário indisponível. Escolha um dos horários oferecidos."
BOOKING_SAVED = "Agendamento salvo com sucesso e mensagem do WhatsApp preparada!"
QUOTE_READY = "Valor calculado."


class BookingService:
    """Quote-and-booking workflow with explicit quote invalidation."""

    def __init__(
        self,
        form: Optional[BookingForm] = None,
        distance: Optional[DistancePort] = None,
        persistence: Optional[PersistencePort] = None,
        session: Optional[SessionContext] = None,
        renderer: Optional[OutputRenderer] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.form = form or BookingForm()
        self._distance = distance or SimulatedDistanceService()
        self._persistence = persistence or InMemoryAppointmentStore()
        self._renderer = renderer or LoggingRenderer()
        self._today = today or date.today
        self._sm = BookingStateMachine()
        self._quote: Optional[Quote] = None
        self._session: Optional[SessionContext] = None
        self.set_session(session)
        self.form.on_change(self._on_field_changed)

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> BookingState:
        return self._sm.current_state

    @property
    def quote(self) -> Optional[Quote]:
        return self._quote

    @property
    def session(self) -> Optional[SessionContext]:
        return self._session

    @property
    def state_machine(self) -> BookingStateMachine:
        return self._sm

    def set_session(self, session: Optional[SessionContext]) -> None:
        """Bind the session resolved by the identity bootstrap."""
        self._session = session
        bind_session(session)

    def _on_field_changed(self, name: str, affects_quote: bool) -> None:
        if not affects_quote or not self._sm.has_valid_quote:
            return
        self._sm.transition(BookingTrigger.INPUTS_CHANGED)
        self._quote = None
        self._renderer.hide_quote()
        logger.info("Quote invalidated: '%s' changed", name)

    def _begin(self, action: str) -> None:
        self.form.locked = True
        self._renderer.set_busy(action, True)

    def _end(self, action: str) -> None:
        self.form.locked = False
        self._renderer.set_busy(action, False)

    def _report(self, exc: BookingError) -> None:
        if isinstance(exc, InputValidationError):
            self._renderer.show_validation_error(exc.field_name, exc.message)
        else:
            self._renderer.show_notice(exc.message)
        logger.info("%s error reported: %s", exc.kind, exc.message)

    # ------------------------------------------------------------------ #
    # Quote
    # ------------------------------------------------------------------ #

    async def request_quote(self) -> QuoteResponse:
        """Validate the form, look up the distance and price the trip."""
        try:
            self._check_not_busy()
            self.form.build_customer()
            trip = self.form.build_trip()
        except BookingError as exc:
            self._report(exc)
            return QuoteResponse(success=False, message=exc.message, error_kind=exc.kind)

        self._sm.transition(BookingTrigger.QUOTE_REQUESTED)
        self._quote = None
        self._renderer.hide_quote()
        self._begin("quote")
        try:
            quote = await self._compute_quote(trip)
        except TransportError as exc:
            self._sm.transition(BookingTrigger.DISTANCE_FAILED)
            self._report(exc)
            return QuoteResponse(success=False, message=exc.message, error_kind=exc.kind)
        finally:
            self._end("quote")

        self._sm.transition(BookingTrigger.DISTANCE_RESOLVED)
        self._quote = quote
        distance_display = format_distance(quote.distance)
        price_display = format_price(quote.price)
        self._renderer.show_quote(distance_display, price_display)
        logger.info("Quote ready: %s, %s", distance_display, price_display)
        return QuoteResponse(
            success=True,
            message=QUOTE_READY,
            quote=quote,
            distance_display=distance_display,
            price_display=price_display,
        )

    async def _compute_quote(self, trip: TripRequest) -> Quote:
        try:
            distance = await self._distance.estimate(trip.start_address, trip.destination)
            distance = Decimal(distance)
            price = quote_price(distance, trip.rate_per_km)
        except Exception as exc:
            logger.warning("Distance lookup failed: %s", exc)
            raise TransportError(f"Erro ao calcular a viagem: {exc}") from exc
        return Quote(trip=trip, distance=distance, price=price)

    # ------------------------------------------------------------------ #
    # Booking
    # ------------------------------------------------------------------ #

    async def book(self) -> BookingResponse:
        """Confirm the quoted trip, persist it once and build the driver link."""
        try:
            self._check_not_busy()
            customer = self.form.build_customer()
            quote = self._require_current_quote()
            booking_date = self._require_bookable_date()
            slot = self._require_slot()
        except BookingError as exc:
            self._report(exc)
            return BookingResponse(success=False, message=exc.message, error_kind=exc.kind)

        self._sm.transition(BookingTrigger.BOOK_REQUESTED)
        appointment = self._build_appointment(customer, quote, booking_date, slot)
        self._begin("book")
        try:
            record_id = await self._persist(appointment)
        except PersistenceError as exc:
            self._sm.transition(BookingTrigger.PERSIST_FAILED)
            self._report(exc)
            return BookingResponse(success=False, message=exc.message, error_kind=exc.kind)
        finally:
            self._end("book")

        self._sm.transition(BookingTrigger.PERSIST_SUCCEEDED)
        try:
            saved = appointment.with_record_id(record_id)
            link = build_deep_link(saved)
            self._renderer.open_link(link)
            self._renderer.show_success(BOOKING_SAVED)
            logger.info("Appointment %s booked for %s at %s", record_id, booking_date, slot)
        finally:
            # the record is stored; a new booking always starts from a new quote
            self._sm.transition(BookingTrigger.CYCLE_COMPLETE)
            self._quote = None
        return BookingResponse(
            success=True,
            message=BOOKING_SAVED,
            record_id=record_id,
            deep_link=link,
            appointment=saved,
            created_at=datetime.now(timezone.utc),
        )

    def _check_not_busy(self) -> None:
        if self._sm.is_busy:
            raise WorkflowBusyError(FORM_LOCKED)

    def _require_current_quote(self) -> Quote:
        quote = self._quote
        if not self._sm.has_valid_quote or quote is None:
            raise AvailabilityError(QUOTE_REQUIRED)
        if not quote.matches(self.form.current_trip()):
            raise AvailabilityError(QUOTE_REQUIRED)
        return quote

    def _require_bookable_date(self) -> date:
        booking_date = self.form.selected_date()
        if booking_date is None:
            raise AvailabilityError(DATE_REQUIRED)
        if not is_bookable_date(booking_date):
            raise AvailabilityError(WEEKEND_UNAVAILABLE)
        if booking_date < earliest_selectable_date(self._today()):
            raise AvailabilityError(DATE_IN_PAST)
        return booking_date

    def _require_slot(self) -> str:
        slot = self.form.selected_slot()
        if slot not in enumerate_slots():
            raise AvailabilityError(SLOT_UNAVAILABLE)
        return slot

    def _build_appointment(
        self, customer: Customer, quote: Quote, booking_date: date, slot: str
    ) -> Appointment:
        session_id = self._session.session_id if self._session else None
        return Appointment(
            customer=customer,
            trip=quote.trip,
            booking_date=booking_date,
            slot=slot,
            quote=quote,
            session_id=session_id or "",
        )

    async def _persist(self, appointment: Appointment) -> str:
        try:
            record_id = await self._persistence.append(self._session, appointment)
        except PersistenceError as exc:
            raise PersistenceError(f"Erro ao salvar o agendamento: {exc.message}") from exc
        except Exception as exc:
            logger.error("Error adding document: %s", exc)
            raise PersistenceError(f"Erro ao salvar o agendamento: {exc}") from exc
        if not record_id:
            logger.error("Document store returned no record id")
            raise PersistenceError("Erro ao salvar o agendamento: identificador não retornado.")
        return record_id
