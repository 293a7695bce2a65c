from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from app.responses import (
    GENERIC_PROBLEM_MESSAGE,
    format_measured_at,
    problem,
    to_reading_response,
)
from models.records import RainfallReading
from models.results import ErrorItem


def _body(response) -> dict:
    return json.loads(response.body)


def test_problem_with_only_validation_errors_is_bad_request() -> None:
    response = problem(
        [
            ErrorItem.validation("foo", "Unexpected parameter: 'foo'"),
            ErrorItem.validation("bar", "Unexpected parameter: 'bar'"),
        ]
    )

    assert response.status_code == 400
    assert _body(response) == {
        "message": "Invalid request.",
        "detail": [
            {"propertyName": "foo", "message": "Unexpected parameter: 'foo'"},
            {"propertyName": "bar", "message": "Unexpected parameter: 'bar'"},
        ],
    }


def test_problem_with_not_found_is_not_found() -> None:
    response = problem([ErrorItem.not_found("No readings found for the specified stationId.")])

    assert response.status_code == 404
    assert _body(response) == {
        "message": "No readings found for the specified stationId.",
        "detail": [],
    }


def test_problem_with_unexpected_error_is_server_error() -> None:
    response = problem([ErrorItem.unexpected("Internal server error")])

    assert response.status_code == 500
    assert _body(response) == {"message": "Internal server error", "detail": []}


def test_problem_with_mixed_errors_reports_the_first_one() -> None:
    response = problem(
        [
            ErrorItem.validation("count", "'Count' must be less than or equal to '100'."),
            ErrorItem.not_found("missing"),
        ]
    )

    assert response.status_code == 500
    assert _body(response)["message"] == "'Count' must be less than or equal to '100'."
    assert _body(response)["detail"] == []


def test_problem_without_errors_is_generic_server_error() -> None:
    response = problem([])

    assert response.status_code == 500
    assert _body(response) == {"message": GENERIC_PROBLEM_MESSAGE, "detail": []}


def test_format_measured_at_uses_whole_seconds_and_z_suffix() -> None:
    reading = RainfallReading(
        measured_at_utc=datetime(2024, 5, 1, 9, 15, 30, 123456, tzinfo=timezone.utc),
        amount=Decimal("0.2"),
    )

    assert format_measured_at(reading) == "2024-05-01T09:15:30Z"


def test_format_measured_at_converts_offsets() -> None:
    reading = RainfallReading(
        measured_at_utc=datetime(2024, 5, 1, 10, 15, tzinfo=timezone(timedelta(hours=1))),
        amount=Decimal("0"),
    )

    assert format_measured_at(reading) == "2024-05-01T09:15:00Z"


def test_reading_response_serializes_amounts_as_numbers() -> None:
    readings = [
        RainfallReading(datetime(2024, 5, 1, 9, 15, tzinfo=timezone.utc), Decimal("0.2")),
        RainfallReading(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc), Decimal("1.4")),
    ]

    payload = to_reading_response(readings).model_dump(mode="json", by_alias=True)

    assert payload == {
        "readings": [
            {"dateMeasured": "2024-05-01T09:15:00Z", "amountMeasured": 0.2},
            {"dateMeasured": "2024-05-01T09:00:00Z", "amountMeasured": 1.4},
        ]
    }
