"""Confirmation message and messaging deep link for the driver."""

from typing import Optional
from urllib.parse import quote

from src.config import settings
from src.messages.formatting import format_date, format_price
from src.schemas.booking_schema import Appointment
from src.utils import digits_only

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_confirmation_message(
    appointment: Appointment, driver_name: Optional[str] = None
) -> str:
    """Build the multi-line booking message.

    Field order and labels are fixed; the driver reads the message by its
    visual layout.
    """
    name = driver_name or settings.driver.name
    lines = [
        f"Olá, {name}! Gostaria de agendar uma viagem.",
        "",
        f"*ID do Agendamento:* {appointment.record_id}",
        "",
        "*Dados da Cliente:*",
        f"*Nome:* {appointment.customer.full_name}",
        f"*Telefone:* {appointment.customer.phone}",
        "",
        "*Detalhes da Viagem:*",
        f"*Partida:* {appointment.trip.start_address}",
        f"*Destino:* {appointment.trip.destination}",
        f"*Data:* {format_date(appointment.booking_date)}",
        f"*Horário:* {appointment.slot}",
        f"*Valor Estimado:* {format_price(appointment.quote.price)}",
    ]
    return "\n".join(lines)


def encode_uri_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_deep_link(
    appointment: Appointment,
    driver_phone: Optional[str] = None,
    messaging_host: Optional[str] = None,
) -> str:
    """Return ``https://<host>/<driver digits>?text=<encoded message>``.

    Raises:
        ValueError: If the appointment has not been persisted yet.
    """
    if not appointment.record_id:
        raise ValueError("Cannot build a deep link for an unsaved appointment")
    phone = digits_only(driver_phone or settings.driver.phone)
    host = messaging_host or settings.driver.messaging_host
    text = encode_uri_component(build_confirmation_message(appointment))
    return f"https://{host}/{phone}?text={text}"
