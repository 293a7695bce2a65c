"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Decimals go out as JSON numbers rather than pydantic's default strings.
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class RainfallReading(BaseModel):
    """A rainfall reading as exposed to API callers."""

    model_config = ConfigDict(populate_by_name=True)

    date_measured: str = Field(
        ...,
        alias="dateMeasured",
        description="UTC measurement time, e.g. 2024-05-01T09:15:00Z.",
    )
    amount_measured: JsonDecimal = Field(
        ..., alias="amountMeasured", description="Amount of rainfall measured."
    )


class RainfallReadingResponse(BaseModel):
    """Readings for a station, most recent first."""

    readings: List[RainfallReading] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Details of an invalid request property."""

    model_config = ConfigDict(populate_by_name=True)

    property_name: str = Field(..., alias="propertyName")
    message: str


class ErrorResponse(BaseModel):
    """Uniform error envelope returned for every non-200 response."""

    message: str
    detail: List[ErrorDetail] = Field(default_factory=list)
