"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class RainfallReading:
    """A single timestamped rainfall measurement reported by a station."""

    measured_at_utc: datetime
    amount: Decimal


@dataclass(frozen=True, slots=True)
class ListRainfallReadingsQuery:
    """Request for the most recent ``count`` readings of a station.

    Out-of-range counts are accepted here and rejected by the validator.
    """

    station_id: str
    count: int = 10
