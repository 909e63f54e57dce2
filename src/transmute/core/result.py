"""
Result envelope for transformer outcomes.

Every transformation returns a Result: ``Ok(value)`` when it succeeded,
``Err(error)`` when it did not. Failure is a first-class value that flows
through composition and lifting untouched, instead of an exception that the
caller has to remember to catch.

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **Caller-defined errors:** ``Err`` holds any error value, not only
      exceptions
    - **Functional composition:** Chain operations with map/flat_map without
      nested try/except blocks
    - **Fail-fast collection:** collect_results() stops at the first Err

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T, E]                             │
        │                    (Type Alias)                              │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[E]      │     Utilities           │
        │   (Success)     │   (Failure)     │                         │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: E      │ • try_result()          │
        │ • map()         │ • map_err()     │ • try_result_with()     │
        │ • flat_map()    │ • or_else()     │ • collect_results()     │
        │ • unwrap()      │ • unwrap_or()   │ • partition_results()   │
        │                 │                 │ • from_optional()       │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    Basic usage:

    >>> def parse_int(text: str) -> Result[int, ValueError]:
    ...     try:
    ...         return Ok(int(text))
    ...     except ValueError as e:
    ...         return Err(e)
    >>> parse_int("42").unwrap()
    42
    >>> parse_int("4.2").is_err()
    True

    Chaining with map and flat_map:

    >>> Ok(10).map(lambda x: x * 2).map(lambda x: x + 1).unwrap()
    21
    >>> Err("oops").map(lambda x: x * 2).unwrap_or(0)
    0

Performance:
    - **Time complexity:** All operations are O(1) except collect_* which are O(n)
    - **Memory:** Ok/Err are frozen dataclasses with __slots__, minimal overhead

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use unwrap_or() or pattern matching for safe extraction

    ❌ DON'T: Raise exceptions inside map/flat_map functions
    ✅ DO: Return Err from flat_map if the operation can fail

Tags:
    result-pattern, error-handling, functional-programming, monadic,
    transmute, type-safety

Usage:
    from transmute.core.result import Result, Ok, Err

    match transformer.transformed_value(raw):
        case Ok(value):
            store(value)
        case Err(error):
            log.warning("transform_failed", error=str(error))
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from transmute.core.errors import TransmuteError, UnwrapError


T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Ok is immutable and, if the wrapped value is hashable, hashable too. Two
    Ok instances are equal when their values are equal, which is what makes
    ``t.transformed_value(1) == Ok("1")`` a meaningful assertion.

    Examples:
        >>> ok = Ok(42)
        >>> ok.is_ok(), ok.is_err()
        (True, False)
        >>> Ok("hello").map(str.upper).unwrap()
        'HELLO'
        >>> Ok(-1).flat_map(lambda x: Ok(x) if x > 0 else Err("negative"))
        Err('negative')
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:
        """Get value or call f with error (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias for flat_map."""
        return f(self.value)

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:
        """Transform error if Err (no-op for Ok)."""
        return self

    def or_else(self, f: Callable[[Any], Result[T, F]]) -> Ok[T]:
        """Return self if Ok, otherwise call f with error."""
        return self

    def inspect(self, f: Callable[[T], None]) -> Ok[T]:
        """Call f with value for side effects, return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Any], None]) -> Ok[T]:
        """Call f with error for side effects (no-op for Ok)."""
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """
    Failed result containing an error.

    Err short-circuits transformation operations: map() and flat_map() hand
    back the same error without calling the function, which is how a failure
    propagates unchanged through composed and lifted transformers.

    The error can be anything the caller chooses. Exceptions (preferably a
    TransmuteError subclass) are the common case and get the richest
    ``to_dict()`` output.

    Examples:
        >>> err = Err(ValueError("something went wrong"))
        >>> err.is_err()
        True
        >>> err.unwrap_or("default")
        'default'
        >>> Err("x").or_else(lambda e: Ok("backup")).unwrap()
        'backup'
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raise the error. Use only when you're sure it's Ok."""
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError(self.error)

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Call f with error to get value."""
        return f(self.error)

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        """No-op for Err."""
        return Err(self.error)

    def flat_map(self, f: Callable[[Any], Any]) -> Err[E]:
        """No-op for Err."""
        return Err(self.error)

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        """No-op for Err."""
        return Err(self.error)

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error."""
        return Err(f(self.error))

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Call f with error to try recovery."""
        return f(self.error)

    def inspect(self, f: Callable[[Any], None]) -> Err[E]:
        """No-op for Err."""
        return self

    def inspect_err(self, f: Callable[[E], None]) -> Err[E]:
        """Call f with error for side effects, return self."""
        f(self.error)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, TransmuteError):
            return {"ok": False, "error": self.error.to_dict()}
        if isinstance(self.error, BaseException):
            return {
                "ok": False,
                "error": {
                    "error_type": type(self.error).__name__,
                    "message": str(self.error),
                },
            }
        return {"ok": False, "error": self.error}

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Union[Ok[T], Err[E]]


# =============================================================================
# RESULT CONSTRUCTORS AND UTILITIES
# =============================================================================


def try_result(f: Callable[[], T]) -> Result[T, Exception]:
    """
    Execute a function and wrap its outcome in a Result.

    The bridge from exception-raising code into Result-returning code.

    Examples:
        >>> try_result(lambda: int("7")).unwrap()
        7
        >>> try_result(lambda: int("seven")).is_err()
        True
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


def try_result_with(
    f: Callable[[], T],
    error_mapper: Callable[[Exception], F] | None = None,
) -> Result[T, Any]:
    """
    Execute a function and map a raised exception to a custom error.

    Like try_result(), but the caught exception is handed to
    ``error_mapper`` first. The mapper is only called on the error path.

    Examples:
        >>> from transmute.core.errors import ParseError
        >>> result = try_result_with(
        ...     lambda: int("x"),
        ...     lambda e: ParseError(f"not a number: {e}", cause=e),
        ... )
        >>> result.error.category.value
        'PARSE'

    Args:
        f: Zero-argument callable that may raise exceptions
        error_mapper: Optional function to transform exceptions

    Returns:
        Ok[T] if f() succeeds, Err with the (mapped) exception if f() raises
    """
    try:
        return Ok(f())
    except Exception as e:
        if error_mapper:
            return Err(error_mapper(e))
        return Err(e)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect Results into a Result of list (fail-fast).

    Iterates in order. If all are Ok, returns Ok with the list of values. If
    any is Err, returns that Err immediately and stops consuming the
    iterable, so a lazy generator of results is only evaluated up to the
    first failure.

    Examples:
        >>> collect_results([Ok(1), Ok(2), Ok(3)]).unwrap()
        [1, 2, 3]
        >>> collect_results([Ok(1), Err("a"), Err("b")])
        Err('a')
        >>> collect_results([]).unwrap()
        []
    """
    values = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                return Err(error)
    return Ok(values)


def partition_results(results: Iterable[Result[T, E]]) -> tuple[list[T], list[E]]:
    """
    Split Results into successes and errors.

    Processes everything; use it when partial results are useful, for
    example to report every element of a batch that failed to convert.

    Examples:
        >>> partition_results([Ok(1), Err("a"), Ok(3)])
        ([1, 3], ['a'])
    """
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                errors.append(error)
    return values, errors


def from_optional(value: T | None, error: E) -> Result[T, E]:
    """
    Convert an optional value to a Result.

    Examples:
        >>> from_optional(5, "missing")
        Ok(5)
        >>> from_optional(None, "missing")
        Err('missing')
    """
    if value is None:
        return Err(error)
    return Ok(value)


__all__ = [
    "Ok",
    "Err",
    "Result",
    "try_result",
    "try_result_with",
    "collect_results",
    "partition_results",
    "from_optional",
]
