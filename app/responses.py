"""Translate domain results into wire payloads and HTTP status codes."""

from __future__ import annotations

from datetime import timezone
from typing import Iterable, Sequence

from fastapi import status
from fastapi.responses import JSONResponse

from app.schemas import ErrorDetail, ErrorResponse, RainfallReading, RainfallReadingResponse
from models.records import RainfallReading as DomainReading
from models.results import ErrorItem, ErrorKind

INVALID_REQUEST_MESSAGE = "Invalid request."
INTERNAL_ERROR_MESSAGE = "Internal server error"
GENERIC_PROBLEM_MESSAGE = "An error occurred while processing your request."
NO_READINGS_MESSAGE = "No readings found for the specified stationId."


def format_measured_at(reading: DomainReading) -> str:
    """Render the measurement time as whole-second UTC with a ``Z`` suffix."""
    instant = reading.measured_at_utc
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return instant.strftime("%Y-%m-%dT%H:%M:%S") + "Z"


def to_reading_response(readings: Iterable[DomainReading]) -> RainfallReadingResponse:
    return RainfallReadingResponse(
        readings=[
            RainfallReading(
                date_measured=format_measured_at(reading),
                amount_measured=reading.amount,
            )
            for reading in readings
        ]
    )


def error_response(
    status_code: int, message: str, detail: Sequence[ErrorDetail] = ()
) -> JSONResponse:
    payload = ErrorResponse(message=message, detail=list(detail))
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json", by_alias=True),
    )


def problem(errors: Sequence[ErrorItem]) -> JSONResponse:
    """Map a list of errors onto a status code and the error envelope.

    All-validation lists become a 400 carrying every error as a detail entry.
    Otherwise only the first error is reported: 404 for not-found, 500 for
    anything else.
    """
    if not errors:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_PROBLEM_MESSAGE)

    if all(error.kind is ErrorKind.validation for error in errors):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            INVALID_REQUEST_MESSAGE,
            [
                ErrorDetail(property_name=error.code, message=error.description)
                for error in errors
            ],
        )

    first = errors[0]
    if first.kind is ErrorKind.not_found:
        return error_response(status.HTTP_404_NOT_FOUND, first.description)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, first.description)
