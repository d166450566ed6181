"""Error taxonomy and the ``Result`` envelope returned by every core operation.

Repository and service coroutines never raise to their callers. Failures are
raised internally as :class:`RepositoryError` subclasses and converted into a
``Result`` carrying an error message and an :class:`ErrorKind` by
:func:`handle_errors`.
"""

from __future__ import annotations

import enum
import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, ParamSpec, TypeVar

import structlog
from pydantic import ValidationError

logger = structlog.get_logger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORAGE_FAILURE = "storage_failure"
    INVALID = "invalid"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """Base exception for persistence-layer failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class NotFoundError(RepositoryError):
    """Raised when an id is absent from its partition."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(RepositoryError):
    """Raised on a uniqueness violation or a disallowed status transition."""

    kind = ErrorKind.CONFLICT


class StorageFailureError(RepositoryError):
    """Raised when a partition write was not persisted.

    The in-memory mutation succeeded but was never committed to the backend.
    """

    kind = ErrorKind.STORAGE_FAILURE


class ValidationFailedError(RepositoryError):
    """Raised when a payload does not satisfy the record schema."""

    kind = ErrorKind.INVALID


_ERRORS_BY_KIND: dict[ErrorKind, type[RepositoryError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.STORAGE_FAILURE: StorageFailureError,
    ErrorKind.INVALID: ValidationFailedError,
    ErrorKind.UNKNOWN: RepositoryError,
}


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Either ``data`` or ``error`` is set, never both and never neither."""

    data: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError("Result must carry exactly one of data or error")
        if self.error is not None and self.kind is None:
            object.__setattr__(self, "kind", ErrorKind.UNKNOWN)
        if self.data is not None and self.kind is not None:
            raise ValueError("Successful result cannot carry an error kind")

    @classmethod
    def success(cls, data: T) -> Result[T]:
        return cls(data=data)

    @classmethod
    def failure(cls, error: str, kind: ErrorKind = ErrorKind.UNKNOWN) -> Result[T]:
        return cls(error=error, kind=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the payload or raise the exception matching ``kind``."""
        if self.error is not None:
            raise _ERRORS_BY_KIND[self.kind or ErrorKind.UNKNOWN](self.error)
        return self.data  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        """Two-field envelope: ``{"data": ...}`` or ``{"error": ...}``."""
        if self.error is not None:
            return {"error": self.error}
        return {"data": self.data}


def handle_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[Result[T]]]]:
    """Wrap a coroutine so every failure becomes a ``Result.failure``."""

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[Result[T]]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
            try:
                return Result.success(await func(*args, **kwargs))
            except RepositoryError as exc:
                await logger.awarning(
                    "operation_failed", operation=operation, kind=exc.kind.value, error=str(exc)
                )
                return Result.failure(str(exc), exc.kind)
            except ValidationError as exc:
                await logger.awarning(
                    "operation_invalid_payload", operation=operation, errors=exc.error_count()
                )
                return Result.failure(_summarize_validation(exc), ErrorKind.INVALID)
            except Exception as exc:
                await logger.aexception("operation_crashed", operation=operation)
                return Result.failure(str(exc) or "Unknown database error", ErrorKind.UNKNOWN)

        return wrapper

    return decorator


def _summarize_validation(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid payload: " + "; ".join(parts)
