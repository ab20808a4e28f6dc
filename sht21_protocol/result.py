"""
Per-call result type.

Every operation that can fail on the bus, on a checksum or in the self-test
returns a Result instead of raising. A Result may carry a value alongside an
error (the self-test report on a failed verdict, for example).
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .constants import ErrorKind
from .exceptions import error_for

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Value and/or error of a single operation."""
    value: Optional[T] = None
    error: ErrorKind = ErrorKind.NONE

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value, ErrorKind.NONE)

    @classmethod
    def failure(cls, error: ErrorKind, value: Optional[T] = None) -> "Result[T]":
        if error == ErrorKind.NONE:
            raise ValueError("failure() needs an error kind other than NONE")
        return cls(value, ErrorKind(error))

    @property
    def ok(self) -> bool:
        return self.error == ErrorKind.NONE

    def unwrap(self) -> Optional[T]:
        """
        Return the value or raise the exception matching the error.

        Raises:
            SHT21Error: Subclass selected by the error kind
        """
        if not self.ok:
            raise error_for(self.error)
        return self.value

    def __repr__(self) -> str:
        if self.ok:
            return f"Result(ok, value={self.value!r})"
        return f"Result({ErrorKind.name_of(self.error)}, value={self.value!r})"
