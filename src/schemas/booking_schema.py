"""Quote, appointment and workflow response models."""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.messages.formatting import format_date, format_price


class Customer(BaseModel):
    """Validated customer identity for one booking attempt."""
    model_config = ConfigDict(frozen=True)

    full_name: str
    cpf: str
    phone: str


class TripRequest(BaseModel):
    """Trip inputs a quote is computed from."""
    model_config = ConfigDict(frozen=True)

    start_address: str
    destination: str
    rate_per_km: Decimal = Field(gt=0)


class Quote(BaseModel):
    """Priced distance estimate tied to the trip inputs it was made for."""
    model_config = ConfigDict(frozen=True)

    trip: TripRequest
    distance: Decimal = Field(ge=0)
    price: Decimal

    def matches(self, trip: Optional[TripRequest]) -> bool:
        return trip is not None and trip == self.trip


class Appointment(BaseModel):
    """Confirmed booking. ``record_id`` is set once persistence issues it."""
    model_config = ConfigDict(frozen=True)

    customer: Customer
    trip: TripRequest
    booking_date: date
    slot: str
    quote: Quote
    session_id: str
    record_id: Optional[str] = None

    def with_record_id(self, record_id: str) -> "Appointment":
        return self.model_copy(update={"record_id": record_id})

    def to_record(self) -> dict[str, Any]:
        """Flat record in the layout the document store keeps."""
        return {
            "fullName": self.customer.full_name,
            "cpf": self.customer.cpf,
            "phone": self.customer.phone,
            "startAddress": self.trip.start_address,
            "destination": self.trip.destination,
            "date": format_date(self.booking_date),
            "time": self.slot,
            "estimatedPrice": format_price(self.quote.price),
            "userId": self.session_id,
        }

    def serialize(self) -> str:
        """Opaque single-string payload for the stored document."""
        return json.dumps(self.to_record(), ensure_ascii=False)


class QuoteResponse(BaseModel):
    """Outcome of a quote request."""
    success: bool
    message: str
    quote: Optional[Quote] = None
    distance_display: str = ""
    price_display: str = ""
    error_kind: Optional[str] = None


class BookingResponse(BaseModel):
    """Outcome of a booking request."""
    success: bool
    message: str
    record_id: Optional[str] = None
    deep_link: Optional[str] = None
    appointment: Optional[Appointment] = None
    error_kind: Optional[str] = None
    created_at: Optional[datetime] = None
