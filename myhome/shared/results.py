"""
Result types for operations whose failures are reported as values.

Used where a failure must not abort the caller, e.g. refreshing a node's
status from the store: the operation returns ``Error(...)`` and the boundary
decides to log it instead of raising.
"""

from dataclasses import dataclass
from typing import Generic, Literal, TypeGuard, TypeVar, Union

S = TypeVar("S")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[S]):
    """Represents a successful result."""

    value: S
    success: Literal[True] = True


@dataclass(frozen=True)
class Error(Generic[E]):
    """Represents an error result."""

    error: E
    success: Literal[False] = False


Result = Union[Success[S], Error[E]]


class ResultHandler:
    """Helpers to build and inspect ``Result`` values."""

    @staticmethod
    def is_success(result: Result[S, E]) -> TypeGuard[Success[S]]:
        return isinstance(result, Success)

    @staticmethod
    def is_error(result: Result[S, E]) -> TypeGuard[Error[E]]:
        return isinstance(result, Error)

    @staticmethod
    def ok(value: S) -> Success[S]:
        return Success(value)

    @staticmethod
    def fail(error: E) -> Error[E]:
        return Error(error)
