"""
Offline console front-end for the booking widget.

Drives the real booking service, form, rules and mock ports from the
terminal. No network calls; the distance lookup and the document store are
simulated.

Usage:
    python console_demo.py
    python console_demo.py --scenario weekend
    python console_demo.py --scenario noquote
"""

import argparse
import asyncio
from datetime import date, timedelta
from typing import Optional

from src.config import settings
from src.rules.scheduler import earliest_selectable_date, enumerate_slots, next_bookable_date
from src.schemas.session_schema import SessionContext
from src.tools.distance import SimulatedDistanceService
from src.tools.identity import IdentityBootstrap
from src.tools.persistence import InMemoryAppointmentStore
from src.workflow.booking_form import BookingForm
from src.workflow.booking_service import BookingService
from src.workflow.errors import WorkflowBusyError

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleRenderer:
    """Prints everything the booking service shows to the user."""

    def set_busy(self, action: str, busy: bool) -> None:
        label = "Calculando..." if action == "quote" else "Agendando..."
        if busy:
            print(f"{DIM}  >> {label}{RESET}")

    def show_validation_error(self, field_name: str, message: str) -> None:
        print(f"{RED}[{field_name or 'form'}] {message}{RESET}")

    def show_notice(self, message: str) -> None:
        print(f"{YELLOW}{BOLD}[Aviso]{RESET} {YELLOW}{message}{RESET}")

    def show_quote(self, distance_display: str, price_display: str) -> None:
        print(f"{GREEN}Distância: {distance_display}  |  Valor: {price_display}{RESET}")

    def hide_quote(self) -> None:
        pass

    def show_success(self, message: str) -> None:
        print(f"{GREEN}{BOLD}{message}{RESET}")

    def open_link(self, url: str) -> None:
        print(f"{BLUE}Abrir: {url}{RESET}")


def _weekday_after(today: date, weekday: int) -> date:
    return today + timedelta(days=(weekday - today.weekday()) % 7 or 7)


class ConsoleSession:
    """Runs the booking widget in the terminal."""

    # Pre-scripted scenarios for --scenario flag; each step is (action, field, value)
    SCENARIOS: dict[str, list[tuple[str, str, str]]] = {
        "booking": [
            ("set", "full_name", "Maria Silva"),
            ("set", "cpf", "52998224725"),
            ("set", "phone", "11912345678"),
            ("set", "start_address", "Rua A"),
            ("set", "destination", "Rua B"),
            ("set", "rate_per_km", "2.00"),
            ("quote", "", ""),
            ("set", "booking_date", "wednesday"),
            ("set", "booking_time", "09:00"),
            ("book", "", ""),
        ],
        "weekend": [
            ("set", "full_name", "Maria Silva"),
            ("set", "cpf", "52998224725"),
            ("set", "phone", "11912345678"),
            ("set", "start_address", "Rua A"),
            ("set", "destination", "Rua B"),
            ("set", "rate_per_km", "2.00"),
            ("quote", "", ""),
            ("set", "booking_date", "saturday"),
            ("book", "", ""),
        ],
        "noquote": [
            ("set", "full_name", "Maria Silva"),
            ("set", "cpf", "52998224725"),
            ("set", "phone", "11912345678"),
            ("set", "start_address", "Rua A"),
            ("set", "destination", "Rua B"),
            ("set", "rate_per_km", "2.00"),
            ("set", "booking_date", "wednesday"),
            ("book", "", ""),
        ],
    }

    MAX_INPUT_LENGTH = 200

    def __init__(
        self,
        session: Optional[SessionContext] = None,
        distance_delay: Optional[float] = None,
    ) -> None:
        self.store = InMemoryAppointmentStore()
        self.service = BookingService(
            form=BookingForm(),
            distance=SimulatedDistanceService(delay_sec=distance_delay),
            persistence=self.store,
            session=session,
            renderer=ConsoleRenderer(),
        )

    @property
    def form(self) -> BookingForm:
        return self.service.form

    def _resolve_date(self, value: str) -> str:
        today = earliest_selectable_date()
        if value == "wednesday":
            return _weekday_after(today, 2).isoformat()
        if value == "saturday":
            return _weekday_after(today, 5).isoformat()
        return value

    async def _step(self, action: str, field_name: str, value: str) -> None:
        if action == "set":
            if field_name == "booking_date":
                value = self._resolve_date(value)
            shown = self.form.set_field(field_name, value)
            print(f"{DIM}  {field_name} = {shown}{RESET}")
        elif action == "quote":
            await self.service.request_quote()
        elif action == "book":
            await self.service.book()
        print(f"{DIM}  >> State: {self.service.state.value}{RESET}")

    async def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  AGENDAMENTO DE VIAGEM - Cenário: {scenario}{RESET}")
        print(f"{BOLD}  Motorista: {settings.driver.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        for action, field_name, value in steps:
            await self._step(action, field_name, value)

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{DIM}  State trace: {' -> '.join(self.service.state_machine.get_state_trace())}{RESET}")
        print(f"{DIM}  Persistence calls: {self.store.append_calls}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    async def run(self) -> None:
        """Interactive loop: ``campo=valor``, ``cotar``, ``agendar``, ``sair``."""
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  AGENDAMENTO DE VIAGEM{RESET}")
        print(f"{DIM}  Campos: {', '.join(d.name for d in BookingForm.FIELD_DEFINITIONS)}{RESET}")
        print(f"{DIM}  Horários: {', '.join(enumerate_slots())}{RESET}")
        print(f"{DIM}  Próxima data disponível: {next_bookable_date().isoformat()}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        while True:
            try:
                line = input(f"\n{BLUE}> {RESET}").strip()[: self.MAX_INPUT_LENGTH]
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not line:
                continue
            if line in ("sair", "exit", "quit"):
                break
            if line == "cotar":
                await self.service.request_quote()
            elif line == "agendar":
                await self.service.book()
            elif "=" in line:
                field_name, _, value = line.partition("=")
                try:
                    shown = self.form.set_field(field_name.strip(), value.strip())
                except ValueError as exc:
                    print(f"{RED}{exc}{RESET}")
                    continue
                except WorkflowBusyError as exc:
                    print(f"{YELLOW}{exc.message}{RESET}")
                    continue
                print(f"{DIM}  {field_name.strip()} = {shown}{RESET}")
            else:
                print(f"{DIM}  Use campo=valor, cotar, agendar ou sair.{RESET}")
            print(f"{DIM}  >> State: {self.service.state.value}{RESET}")


async def _main(scenario: Optional[str]) -> None:
    identity = IdentityBootstrap()
    session = await identity.start()
    console = ConsoleSession(session=session, distance_delay=0.0 if scenario else None)
    if scenario:
        await console.run_scenario(scenario)
    else:
        await console.run()


def main() -> None:
    parser = argparse.ArgumentParser(description="Ride booking console")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        help="Play a scripted scenario instead of the interactive prompt",
    )
    args = parser.parse_args()
    asyncio.run(_main(args.scenario))


if __name__ == "__main__":
    main()
