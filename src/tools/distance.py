"""
Simulated distance lookup.

In production, this would query a routing API (Google Maps Distance
Matrix, OSRM) for the driving distance between the two addresses.
"""

import asyncio
import logging
import random
from decimal import Decimal
from typing import Optional, Protocol

from src.config import settings

logger = logging.getLogger(__name__)


class DistancePort(Protocol):
    """Resolves the distance in km between two addresses, or raises."""

    async def estimate(self, start: str, destination: str) -> Decimal: ...


class SimulatedDistanceService:
    """Returns a uniformly random whole-km distance after a fixed delay."""

    def __init__(
        self,
        min_km: Optional[int] = None,
        max_km: Optional[int] = None,
        delay_sec: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        cfg = settings.distance
        self.min_km = cfg.min_km if min_km is None else min_km
        self.max_km = cfg.max_km if max_km is None else max_km
        self.delay_sec = cfg.delay_sec if delay_sec is None else delay_sec
        self._rng = rng or random.Random()

    async def estimate(self, start: str, destination: str) -> Decimal:
        distance = self._rng.randint(self.min_km, self.max_km)
        await asyncio.sleep(self.delay_sec)
        logger.debug("Simulated distance %s -> %s: %d km", start, destination, distance)
        return Decimal(distance)
