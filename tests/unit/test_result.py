"""Unit tests for the Result envelope and the error-handling decorator."""

from __future__ import annotations

import pytest
from pydantic import BaseModel
from src.core.errors import (
    ConflictError,
    ErrorKind,
    NotFoundError,
    Result,
    StorageFailureError,
    handle_errors,
)


class TestResult:
    def test_success_carries_data_only(self) -> None:
        result = Result.success([1, 2])

        assert result.ok
        assert result.data == [1, 2]
        assert result.error is None
        assert result.to_dict() == {"data": [1, 2]}

    def test_failure_carries_error_and_kind(self) -> None:
        result = Result.failure("User not found", ErrorKind.NOT_FOUND)

        assert not result.ok
        assert result.data is None
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.to_dict() == {"error": "User not found"}

    def test_both_or_neither_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Result()
        with pytest.raises(ValueError):
            Result(data=1, error="boom")

    def test_unwrap_raises_matching_exception(self) -> None:
        with pytest.raises(NotFoundError, match="missing"):
            Result.failure("missing", ErrorKind.NOT_FOUND).unwrap()
        with pytest.raises(StorageFailureError):
            Result.failure("disk", ErrorKind.STORAGE_FAILURE).unwrap()


class TestHandleErrors:
    @pytest.mark.asyncio
    async def test_wraps_return_value(self) -> None:
        @handle_errors("test.ok")
        async def operation() -> str:
            return "done"

        result = await operation()

        assert result == Result.success("done")

    @pytest.mark.asyncio
    async def test_repository_error_keeps_kind(self) -> None:
        @handle_errors("test.conflict")
        async def operation() -> str:
            raise ConflictError("User with this email already exists")

        result = await operation()

        assert result.kind == ErrorKind.CONFLICT
        assert result.error == "User with this email already exists"

    @pytest.mark.asyncio
    async def test_validation_error_becomes_invalid(self) -> None:
        class Payload(BaseModel):
            hours: int

        @handle_errors("test.invalid")
        async def operation() -> Payload:
            return Payload.model_validate({"hours": "many"})

        result = await operation()

        assert result.kind == ErrorKind.INVALID
        assert result.error is not None
        assert result.error.startswith("Invalid payload: hours:")

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_unknown(self) -> None:
        @handle_errors("test.crash")
        async def operation() -> None:
            raise RuntimeError("kaboom")

        result = await operation()

        assert result.kind == ErrorKind.UNKNOWN
        assert result.error == "kaboom"
