"""Validate-then-handle dispatch for queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Protocol, TypeVar

from models.results import ErrorItem, Result

logger = logging.getLogger(__name__)

Q = TypeVar("Q")
Q_contra = TypeVar("Q_contra", contravariant=True)
R = TypeVar("R")


class Validator(Protocol[Q_contra]):
    def validate(self, query: Q_contra) -> List[ErrorItem]:
        ...


HandleFn = Callable[[Q], Awaitable[Result[R]]]


@dataclass(frozen=True)
class _Registration(Generic[Q, R]):
    handle: HandleFn
    validator: Optional[Validator[Q]] = None


class RequestPipeline:
    """Routes each query to its handler, running its validator first.

    Query types are registered independently, so adding a new query never
    requires touching the dispatch logic.
    """

    def __init__(self) -> None:
        self._registrations: Dict[type, _Registration[Any, Any]] = {}

    def register(
        self,
        query_type: type,
        handle: HandleFn,
        validator: Optional[Validator[Any]] = None,
    ) -> None:
        if query_type in self._registrations:
            raise ValueError(f"A handler for {query_type.__name__} is already registered.")
        self._registrations[query_type] = _Registration(handle=handle, validator=validator)

    def is_registered(self, query_type: type) -> bool:
        return query_type in self._registrations

    async def send(self, query: Any) -> Result[Any]:
        registration = self._registrations.get(type(query))
        if registration is None:
            raise LookupError(f"No handler registered for {type(query).__name__}.")

        if registration.validator is not None:
            errors = registration.validator.validate(query)
            if errors:
                logger.info(
                    "%s rejected by validator",
                    type(query).__name__,
                    extra={"error_count": len(errors)},
                )
                return Result.failure(errors)

        return await registration.handle(query)
