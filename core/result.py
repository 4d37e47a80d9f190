"""
Result types for fileshim.

Every file operation returns either Ok(value) or Err(FileIOError) instead of
raising. Callers check the tag before touching the value.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, TypeVar, Union


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class FileIOError:
    """A failed filesystem operation, described by its message only."""
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "FileIOError":
        """Build an error value from the exception raised by the OS call."""
        return cls(message=str(exc) or exc.__class__.__name__)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message}


class UnwrapError(Exception):
    """Raised by Err.unwrap(). Carries the original error value."""

    def __init__(self, error: FileIOError):
        super().__init__(f"Called unwrap() on an Err: {error.message}")
        self.error = error


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result. ``value`` is None for operations with no output."""
    value: T = None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """Apply fn to the contained value."""
        return Ok(fn(self.value))

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": True, "value": self.value}


@dataclass(frozen=True)
class Err:
    """Failed result carrying a FileIOError."""
    error: FileIOError

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """
        Explicitly demand a value from a failed result.

        Raises:
            UnwrapError: always, wrapping the error value
        """
        raise UnwrapError(self.error)

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.error.to_dict()}


Result = Union[Ok[T], Err]
