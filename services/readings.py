"""Validation and handling for the list-readings query."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from models.records import ListRainfallReadingsQuery, RainfallReading
from models.results import ErrorItem, Result
from services.pipeline import RequestPipeline
from services.upstream import RainfallApiClient, build_default_client

COUNT_LOWER_BOUND = 1
COUNT_UPPER_BOUND = 100


class ListRainfallReadingsQueryValidator:
    """Checks that ``count`` lies within the supported window."""

    def validate(self, query: ListRainfallReadingsQuery) -> List[ErrorItem]:
        if query.count < COUNT_LOWER_BOUND:
            return [
                ErrorItem.validation(
                    code="count",
                    description=f"'Count' must be greater than or equal to '{COUNT_LOWER_BOUND}'.",
                )
            ]
        if query.count > COUNT_UPPER_BOUND:
            return [
                ErrorItem.validation(
                    code="count",
                    description=f"'Count' must be less than or equal to '{COUNT_UPPER_BOUND}'.",
                )
            ]
        return []


class ListRainfallReadingsQueryHandler:
    """Fetches readings from upstream; an empty list is still a success here."""

    def __init__(self, client: RainfallApiClient) -> None:
        self.client = client

    async def handle(
        self, query: ListRainfallReadingsQuery
    ) -> Result[List[RainfallReading]]:
        return await self.client.fetch_readings(query.station_id, query.count)


def build_pipeline(client: RainfallApiClient) -> RequestPipeline:
    pipeline = RequestPipeline()
    pipeline.register(
        ListRainfallReadingsQuery,
        ListRainfallReadingsQueryHandler(client).handle,
        ListRainfallReadingsQueryValidator(),
    )
    return pipeline


@lru_cache
def build_default_pipeline() -> RequestPipeline:
    """Composition root for the default upstream client."""
    return build_pipeline(build_default_client())
