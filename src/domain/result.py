"""
Result type for railway-style error handling in the exchange proxy.

Each dispatch step returns Success or Failure; the use case converts the final
Result into a ProxyOutcome at a single boundary.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    error: E


Result = Union[Success[T], Failure[E]]
