"""HTTP client for the flood-monitoring rainfall readings endpoint."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError, field_validator

from models.records import RainfallReading
from models.results import ErrorItem, Result
from settings import get_settings

logger = logging.getLogger(__name__)

READINGS_PATH = "/flood-monitoring/id/stations/{station_id}/readings"
UPSTREAM_FAILURE_MESSAGE = "Internal server error"


class UpstreamReadingItem(BaseModel):
    dateTime: datetime
    value: Decimal

    @field_validator("dateTime", mode="before")
    @classmethod
    def parse_iso_timestamp(cls, value: object) -> datetime:
        if not isinstance(value, str):
            raise ValueError("dateTime must be an ISO-8601 string")
        candidate = value.strip()
        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"
        return datetime.fromisoformat(candidate)


class UpstreamReadingEnvelope(BaseModel):
    items: Optional[List[UpstreamReadingItem]] = None


@dataclass(frozen=True)
class UpstreamError:
    """Why a call to the upstream API did not produce readings."""

    reason: str
    status_code: Optional[int] = None

    def to_error_item(self) -> ErrorItem:
        return ErrorItem.unexpected(
            description=UPSTREAM_FAILURE_MESSAGE, code="Upstream.Unavailable"
        )


def build_readings_path(station_id: str, limit: int) -> str:
    path = READINGS_PATH.format(station_id=quote(station_id, safe=""))
    return f"{path}?_sorted&_limit={limit}&parameter=rainfall"


class RainfallApiClient:
    """Fetches station readings over a pooled ``httpx.AsyncClient``.

    Failures come back as error results rather than exceptions; cancelling the
    awaiting task aborts the in-flight request.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_readings(
        self, station_id: str, limit: int
    ) -> Result[List[RainfallReading]]:
        path = build_readings_path(station_id, limit)
        started = time.perf_counter()
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            return self._fail(
                UpstreamError(reason=f"{type(exc).__name__}: {exc}"),
                station_id=station_id,
                url=path,
            )
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        if not response.is_success:
            return self._fail(
                UpstreamError(
                    reason="unsuccessful status",
                    status_code=response.status_code,
                ),
                station_id=station_id,
                url=path,
            )

        try:
            readings = self._parse_readings(response)
        except (ValueError, ValidationError) as exc:
            return self._fail(
                UpstreamError(
                    reason=f"unreadable payload: {exc}",
                    status_code=response.status_code,
                ),
                station_id=station_id,
                url=path,
            )

        logger.info(
            "Fetched rainfall readings",
            extra={
                "station_id": station_id,
                "count": len(readings),
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )
        return Result.success(readings)

    @staticmethod
    def _parse_readings(response: httpx.Response) -> List[RainfallReading]:
        if not response.content.strip():
            return []
        payload = response.json(parse_float=Decimal)
        if payload is None:
            return []
        envelope = UpstreamReadingEnvelope.model_validate(payload)
        return [
            RainfallReading(
                measured_at_utc=_as_utc(item.dateTime),
                amount=item.value,
            )
            for item in envelope.items or []
        ]

    @staticmethod
    def _fail(
        error: UpstreamError, station_id: str, url: str
    ) -> Result[List[RainfallReading]]:
        logger.error(
            "Upstream rainfall request failed",
            extra={
                "station_id": station_id,
                "url": url,
                "status_code": error.status_code,
                "reason": error.reason,
            },
        )
        return Result.failure([error.to_error_item()])


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@lru_cache
def build_default_client() -> RainfallApiClient:
    """Factory that wires the upstream client from settings."""
    settings = get_settings()
    http_client = httpx.AsyncClient(
        base_url=settings.upstream_base_url,
        timeout=settings.upstream_timeout,
        headers={"Accept": "application/json"},
    )
    return RainfallApiClient(http_client)
