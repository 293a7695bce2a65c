"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.responses import JSONResponse

from app.responses import NO_READINGS_MESSAGE, problem, to_reading_response
from app.schemas import ErrorResponse, RainfallReadingResponse
from models.records import ListRainfallReadingsQuery
from models.results import ErrorItem
from services.pipeline import RequestPipeline
from services.readings import build_default_pipeline

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10
LIST_READINGS_QUERY_KEYS = frozenset({"count"})

router = APIRouter()


def get_pipeline() -> RequestPipeline:
    return build_default_pipeline()


def unexpected_query_key_errors(request: Request, allowed: frozenset[str]) -> List[ErrorItem]:
    errors: List[ErrorItem] = []
    for key in request.query_params.keys():
        if key not in allowed:
            errors.append(
                ErrorItem.validation(code=key, description=f"Unexpected parameter: '{key}'")
            )
    return errors


@router.get(
    "/rainfall/id/{station_id}/readings",
    response_model=RainfallReadingResponse,
    summary="Get rainfall readings by station Id.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid request."},
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "No readings found for the specified stationId.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error.",
        },
    },
    tags=["Rainfall"],
)
async def list_readings(
    request: Request,
    station_id: str = Path(..., description="The id of the reading station."),
    count: int = Query(DEFAULT_COUNT, description="The number of readings to return."),
    pipeline: RequestPipeline = Depends(get_pipeline),
) -> Union[RainfallReadingResponse, JSONResponse]:
    key_errors = unexpected_query_key_errors(request, LIST_READINGS_QUERY_KEYS)
    if key_errors:
        return problem(key_errors)

    logger.info(
        "Listing rainfall readings",
        extra={"station_id": station_id, "count": count},
    )
    result = await pipeline.send(ListRainfallReadingsQuery(station_id=station_id, count=count))
    if result.is_error:
        return problem(result.errors)

    # An unknown station and a station with no data both arrive here as [].
    if not result.value:
        return problem([ErrorItem.not_found(NO_READINGS_MESSAGE)])

    return to_reading_response(result.value)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
    include_in_schema=False,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
