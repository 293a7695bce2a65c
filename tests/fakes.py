"""In-memory stand-in for the upstream flood-monitoring API."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import httpx

from services.upstream import RainfallApiClient

UPSTREAM_BASE_URL = "https://upstream.test"
LATEST_READING_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeUpstream:
    """Serves ``{"items": [...]}`` per station, newest first, honouring ``_limit``."""

    def __init__(self) -> None:
        self.stations: Dict[str, List[Dict[str, Any]]] = {}
        self.requests: List[httpx.Request] = []
        self.failure_status: Optional[int] = None

    def with_readings(
        self,
        station_id: str,
        count: int,
        step: timedelta = timedelta(minutes=15),
    ) -> "FakeUpstream":
        items = self.stations.setdefault(station_id, [])
        for index in range(count):
            measured_at = LATEST_READING_AT - step * index
            items.append(
                {
                    "dateTime": measured_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
                    "value": round(0.2 * (index % 5), 1),
                }
            )
        return self

    def fail_with(self, status_code: int) -> "FakeUpstream":
        self.failure_status = status_code
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure_status is not None:
            return httpx.Response(self.failure_status, text="upstream unavailable")

        # /flood-monitoring/id/stations/{station_id}/readings
        station_id = unquote(request.url.path.split("/")[-2])
        limit = int(request.url.params.get("_limit", "500"))
        items = sorted(
            self.stations.get(station_id, []),
            key=lambda item: item["dateTime"],
            reverse=True,
        )
        return httpx.Response(200, json={"items": items[:limit]})

    def build_client(self) -> RainfallApiClient:
        transport = httpx.MockTransport(self.handler)
        return RainfallApiClient(
            httpx.AsyncClient(transport=transport, base_url=UPSTREAM_BASE_URL)
        )
