"""Tagged result type for calls to the analysis oracle."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful oracle call carrying validated data."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed oracle call: unavailable, timed out or malformed output."""

    reason: str

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return default


OracleResult = Union[Ok[T], Err]
