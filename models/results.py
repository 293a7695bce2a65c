"""Error taxonomy and the result type threaded through the request pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, Optional, Tuple, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Categories that decide how an error surfaces over HTTP."""

    validation = "validation"
    not_found = "not_found"
    unexpected = "unexpected"


@dataclass(frozen=True, slots=True)
class ErrorItem:
    code: str
    description: str
    kind: ErrorKind = ErrorKind.unexpected

    @classmethod
    def validation(cls, code: str, description: str) -> "ErrorItem":
        return cls(code=code, description=description, kind=ErrorKind.validation)

    @classmethod
    def not_found(
        cls, description: str, code: str = "General.NotFound"
    ) -> "ErrorItem":
        return cls(code=code, description=description, kind=ErrorKind.not_found)

    @classmethod
    def unexpected(
        cls, description: str, code: str = "General.Unexpected"
    ) -> "ErrorItem":
        return cls(code=code, description=description, kind=ErrorKind.unexpected)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a success value or one or more errors, never both."""

    value: Optional[T] = None
    errors: Tuple[ErrorItem, ...] = ()

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, errors: Iterable[ErrorItem]) -> "Result[T]":
        collected = tuple(errors)
        if not collected:
            raise ValueError("A failed result requires at least one error.")
        return cls(errors=collected)

    @property
    def is_error(self) -> bool:
        return bool(self.errors)
