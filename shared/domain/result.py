"""
Result value

Domain operations that can be refused for ordinary business reasons
(invalid input, a conflicting booking, a missing id) return a Result
instead of raising. Callers branch on ``ok``; callers that prefer
exception flow call ``unwrap()``.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a domain operation: either a value or an error"""
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T = None) -> 'Result[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> 'Result[T]':
        if error is None:
            raise ValueError("A failed result needs an error")
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error if the operation failed"""
        if self.error is not None:
            raise self.error
        return self.value

    def __bool__(self):
        return self.ok
