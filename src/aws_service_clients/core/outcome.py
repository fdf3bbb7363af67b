"""Result-or-error value returned by every operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from aws_service_clients.core.errors import AWSError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tagged union of a successful result and an :class:`AWSError`."""

    _result: T | None = None
    _error: AWSError | None = None

    @classmethod
    def success(cls, result: T) -> Outcome[T]:
        return cls(_result=result)

    @classmethod
    def failure(cls, error: AWSError) -> Outcome[T]:
        return cls(_error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def result(self) -> T:
        if self._error is not None:
            raise ValueError(f"Outcome is a failure: {self._error}")
        return self._result  # type: ignore[return-value]

    @property
    def error(self) -> AWSError:
        if self._error is None:
            raise ValueError("Outcome is a success and carries no error")
        return self._error

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Outcome(error={self._error!r})"
        return f"Outcome(result={self._result!r})"
