"""
Booking form state: the input collector of the workflow.

Holds the current value of every form field, applies the input masks as
values are typed, and builds validated Customer / TripRequest models on
submission. Changes are published to one listener so the booking service
can drop a quote when a trip input is edited.

Usage:
    form = BookingForm()
    form.set_field("cpf", "52998224725")      # -> "529.982.247-25"
    customer = form.build_customer()          # raises InputValidationError
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Union

from src.rules.contact_formatter import apply_mask, format_cpf, format_phone, is_complete_phone
from src.rules.id_checksum import is_valid_cpf
from src.rules.scheduler import enumerate_slots
from src.schemas.booking_schema import Customer, TripRequest
from src.workflow.errors import AvailabilityError, InputValidationError, WorkflowBusyError

logger = logging.getLogger(__name__)

NAME_REQUIRED = "Por favor, informe seu nome completo."
CPF_INVALID = "O CPF digitado é inválido. Por favor, verifique."
PHONE_INVALID = "Por favor, informe um telefone válido."
ADDRESSES_REQUIRED = "Por favor, informe os endereços de partida e destino."
RATE_INVALID = "Por favor, insira um valor por KM válido."
DATE_INVALID = "Data inválida. Use o formato AAAA-MM-DD."
FORM_LOCKED = "Aguarde a conclusão da operação em andamento."

ChangeListener = Callable[[str, bool], None]


@dataclass(frozen=True)
class FieldDefinition:
    """Schema for a single form field."""

    name: str
    display_name: str
    formatter: Optional[Callable[[str], str]] = None
    affects_quote: bool = False


class BookingForm:
    """Form fields of the booking widget."""

    FIELD_DEFINITIONS: list[FieldDefinition] = [
        FieldDefinition("full_name", "nome completo"),
        FieldDefinition("cpf", "CPF", formatter=format_cpf),
        FieldDefinition("phone", "telefone", formatter=format_phone),
        FieldDefinition("rate_per_km", "valor por km", affects_quote=True),
        FieldDefinition("start_address", "endereço de partida", affects_quote=True),
        FieldDefinition("destination", "destino", affects_quote=True),
        FieldDefinition("booking_date", "data"),
        FieldDefinition("booking_time", "horário"),
    ]

    def __init__(self) -> None:
        self.fields: dict[str, str] = {defn.name: "" for defn in self.FIELD_DEFINITIONS}
        self._listener: Optional[ChangeListener] = None
        # set while a quote or booking is in flight
        self.locked = False

    def _get_definition(self, name: str) -> FieldDefinition:
        for defn in self.FIELD_DEFINITIONS:
            if defn.name == name:
                return defn
        raise ValueError(f"Unknown field: {name}")

    def on_change(self, listener: ChangeListener) -> None:
        """Register the single change listener, called as ``listener(name, affects_quote)``."""
        if self._listener is not None:
            raise RuntimeError("Form already has a change listener")
        self._listener = listener

    def set_field(self, name: str, value: Union[str, date, None]) -> str:
        """Store a field value (masked where the field has a mask) and return it."""
        defn = self._get_definition(name)
        if self.locked:
            raise WorkflowBusyError(FORM_LOCKED)
        text = "" if value is None else str(value)
        if defn.formatter:
            text = defn.formatter(text)

        if text == self.fields[name]:
            return text
        self.fields[name] = text
        logger.debug("Field '%s' changed", name)
        if self._listener is not None:
            self._listener(name, defn.affects_quote)
        return text

    def type_into(self, name: str, typed: str) -> str:
        """Append keystrokes to a field, re-applying its mask."""
        defn = self._get_definition(name)
        current = self.fields[name]
        if defn.formatter:
            return self.set_field(name, apply_mask(current, typed, defn.formatter))
        return self.set_field(name, current + typed)

    def get(self, name: str) -> str:
        self._get_definition(name)
        return self.fields[name]

    # ------------------------------------------------------------------ #
    # Submission-time builders
    # ------------------------------------------------------------------ #

    def build_customer(self) -> Customer:
        """Validate the customer fields.

        Raises:
            InputValidationError: On the first invalid field, in form order.
        """
        name = self.get("full_name").strip()
        if not name:
            raise InputValidationError(NAME_REQUIRED, "full_name")
        cpf = self.get("cpf")
        if not is_valid_cpf(cpf):
            raise InputValidationError(CPF_INVALID, "cpf")
        phone = self.get("phone")
        if not is_complete_phone(phone):
            raise InputValidationError(PHONE_INVALID, "phone")
        return Customer(full_name=name, cpf=cpf, phone=phone)

    def build_trip(self) -> TripRequest:
        """Validate the trip fields.

        Raises:
            InputValidationError: On missing addresses or a bad rate.
        """
        start = self.get("start_address").strip()
        destination = self.get("destination").strip()
        if not start or not destination:
            raise InputValidationError(ADDRESSES_REQUIRED, "start_address")
        rate = self._parse_rate(self.get("rate_per_km"))
        return TripRequest(start_address=start, destination=destination, rate_per_km=rate)

    def current_trip(self) -> Optional[TripRequest]:
        """The trip as currently entered, or None if it doesn't validate."""
        try:
            return self.build_trip()
        except InputValidationError:
            return None

    @staticmethod
    def _parse_rate(raw: str) -> Decimal:
        try:
            rate = Decimal(raw.strip().replace(",", "."))
        except InvalidOperation:
            raise InputValidationError(RATE_INVALID, "rate_per_km") from None
        if not rate.is_finite() or rate <= 0:
            raise InputValidationError(RATE_INVALID, "rate_per_km")
        return rate

    def selected_date(self) -> Optional[date]:
        """The chosen date, or None when nothing is selected.

        Raises:
            AvailabilityError: If the value is not an ISO date.
        """
        raw = self.get("booking_date").strip()
        if not raw:
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            raise AvailabilityError(DATE_INVALID) from None

    def selected_slot(self) -> str:
        """The chosen slot; the first slot of the day when none is picked."""
        return self.get("booking_time").strip() or enumerate_slots()[0]
