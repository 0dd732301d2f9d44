"""Result — tagged success/error outcome returned by every command handler.

Invariants:
    - A handler returns exactly one of Success(value) or Failure(error)
    - ok is True only for Success; value is only readable on Success

Design Decisions:
    - Two small generic dataclasses plus a union alias, narrowed with `result.ok`
      or isinstance — no monadic helpers beyond what handlers actually use
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from chickquita.core.errors import Error, ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying the handler's projection."""
    value: T

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying a typed error."""
    error: Error

    @property
    def ok(self) -> bool:
        return False

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def value(self):
        raise AttributeError(
            f"Failure has no value ({self.error.code.value}: {self.error.message})",
        )


Result = Union[Success[T], Failure]
