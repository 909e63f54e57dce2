"""
Bidirectional value transformers.

A ValueTransformer converts a value of type A into a value of type B and
back again. Each direction is a plain function returning a Result, so a
conversion that cannot be performed is reported as ``Err(error)`` with an
error type chosen by the caller, never as a raised exception.

Transformers are values: frozen, stateless after construction and freely
shareable. New transformers are built from existing ones with a handful of
combinators, none of which mutate their inputs.

Manifesto:
    - **Symmetric by construction:** forward and backward travel together
    - **Failure is a value:** Err flows through combinators untouched
    - **Algebraic:** compose is associative, identity() is its neutral
      element, flip is an involution
    - **No hidden state:** the supplied functions must be pure; the
      transformer adds nothing on top of them

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                 ValueTransformer[A, B, E]                     │
        │        forward: A -> Result[B, E]                             │
        │        backward: B -> Result[A, E]                            │
        ├──────────────────────────────────────────────────────────────┤
        │  identity()          A <-> A                                  │
        │  flip(t)             B <-> A          t.flipped()             │
        │  compose(t1, t2)     A <-> C          t1 >> t2, t2 << t1      │
        │  compose_all(*ts)    left fold of compose                     │
        │  from_callables(f,g) wraps raising functions into Results     │
        └──────────────────────────────────────────────────────────────┘

        compose(t1, t2):
            forward   a ──t1.forward──> b ──t2.forward──> c
            backward  a <─t1.backward── b <─t2.backward── c
            first Err short-circuits the chain

Examples:
    >>> def parse(text: str) -> Result[int, str]:
    ...     return Ok(int(text)) if text.lstrip("-").isdigit() else Err(text)
    >>> string = ValueTransformer(lambda n: Ok(str(n)), parse, name="int<->str")
    >>> string.transformed_value(1)
    Ok('1')
    >>> string.reverse_transformed_value("2.5")
    Err('2.5')
    >>> flip(string).transformed_value("3")
    Ok(3)
    >>> (string >> flip(string)).transformed_value(5)
    Ok(5)

Guardrails:
    ❌ DON'T: Raise from forward/backward to signal a bad value
    ✅ DO: Return Err, or wrap raising code with from_callables()

    ❌ DON'T: Close over mutable state in forward/backward
    ✅ DO: Keep both functions pure so transformers stay shareable

Tags:
    value-transformer, bidirectional, composition, functional-programming,
    transmute

Doc-Types:
    - API Reference
    - Transformer Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Generic, TypeVar

from transmute.core.errors import (
    Direction,
    ErrorContext,
    InvalidTransformerError,
    TransformError,
)
from transmute.core.result import Ok, Result, try_result_with


A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
E = TypeVar("E")


def derive_name(template: str, *names: str | None) -> str | None:
    """Build the name of a derived transformer, or None if no source is named."""
    if all(name is None for name in names):
        return None
    return template.format(*(name or "<anonymous>" for name in names))


@dataclass(frozen=True, slots=True)
class ValueTransformer(Generic[A, B, E]):
    """
    A pair of fallible functions converting between A and B.

    Equality is structural over the two functions: ``flip(flip(t)) == t``
    holds because the same function objects end up in the same slots. The
    optional ``name`` is descriptive only and takes no part in equality.

    Examples:
        >>> upper = ValueTransformer(lambda s: Ok(s.upper()), lambda s: Ok(s.lower()))
        >>> upper.transformed_value("abc")
        Ok('ABC')
        >>> upper.reverse_transformed_value("ABC")
        Ok('abc')

    Raises:
        InvalidTransformerError: forward or backward is not callable
    """

    forward: Callable[[A], Result[B, E]]
    backward: Callable[[B], Result[A, E]]
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        for role in ("forward", "backward"):
            if not callable(getattr(self, role)):
                raise InvalidTransformerError(
                    f"{role} must be callable, got {type(getattr(self, role)).__name__}",
                    context=ErrorContext(transformer=self.name),
                )

    def transformed_value(self, value: A) -> Result[B, E]:
        """Apply the forward function."""
        return self.forward(value)

    def reverse_transformed_value(self, value: B) -> Result[A, E]:
        """Apply the backward function."""
        return self.backward(value)

    def flipped(self) -> ValueTransformer[B, A, E]:
        """Same as flip(self)."""
        return flip(self)

    def __rshift__(self, other: Any) -> Any:
        if not isinstance(other, ValueTransformer):
            return NotImplemented
        return compose(self, other)

    def __lshift__(self, other: Any) -> Any:
        if not isinstance(other, ValueTransformer):
            return NotImplemented
        return compose(other, self)

    def __repr__(self) -> str:
        if self.name is not None:
            return f"ValueTransformer({self.name!r})"
        return f"ValueTransformer(forward={self.forward!r}, backward={self.backward!r})"


def _ok(value: Any) -> Ok[Any]:
    return Ok(value)


def identity() -> ValueTransformer[A, A, Any]:
    """The transformer that returns its input unchanged in both directions."""
    return ValueTransformer(_ok, _ok, name="identity")


def flip(transformer: ValueTransformer[A, B, E]) -> ValueTransformer[B, A, E]:
    """
    Swap forward and backward.

    Examples:
        >>> t = ValueTransformer(lambda n: Ok(str(n)), lambda s: Ok(int(s)))
        >>> flip(t).transformed_value("4")
        Ok(4)
        >>> flip(flip(t)) == t
        True
    """
    return ValueTransformer(
        transformer.backward,
        transformer.forward,
        name=derive_name("flip({})", transformer.name),
    )


def compose(
    first: ValueTransformer[A, B, E],
    second: ValueTransformer[B, C, E],
) -> ValueTransformer[A, C, E]:
    """
    Chain two transformers end to end.

    Forward runs ``first`` then ``second``; backward runs ``second`` then
    ``first``. The first Err is returned as-is and the remaining function is
    never called.

    Examples:
        >>> inc = ValueTransformer(lambda n: Ok(n + 1), lambda n: Ok(n - 1))
        >>> dbl = ValueTransformer(lambda n: Ok(n * 2), lambda n: Ok(n // 2))
        >>> compose(inc, dbl).transformed_value(3)
        Ok(8)
        >>> compose(inc, dbl).reverse_transformed_value(8)
        Ok(3)
    """
    first_forward, first_backward = first.forward, first.backward
    second_forward, second_backward = second.forward, second.backward

    def forward(value: A) -> Result[C, E]:
        return first_forward(value).flat_map(second_forward)

    def backward(value: C) -> Result[A, E]:
        return second_backward(value).flat_map(first_backward)

    return ValueTransformer(
        forward,
        backward,
        name=derive_name("{} >> {}", first.name, second.name),
    )


def compose_all(*transformers: ValueTransformer[Any, Any, Any]) -> ValueTransformer[Any, Any, Any]:
    """
    Compose any number of transformers left to right.

    ``compose_all()`` is identity() and ``compose_all(t)`` is ``t`` itself.
    """
    if not transformers:
        return identity()
    return reduce(compose, transformers)


def from_callables(
    forward: Callable[[A], B],
    backward: Callable[[B], A],
    *,
    error_mapper: Callable[[Exception], Any] | None = None,
    name: str | None = None,
) -> ValueTransformer[A, B, Any]:
    """
    Build a transformer from plain functions that raise on bad input.

    An exception raised by either function becomes ``Err``: by default a
    TransformError recording the value, the direction and the transformer
    name, with the original exception chained as its cause. Pass
    ``error_mapper`` to produce a different error value instead.

    Examples:
        >>> t = from_callables(str, int, name="int<->str")
        >>> t.reverse_transformed_value("12")
        Ok(12)
        >>> err = t.reverse_transformed_value("1.5").error
        >>> err.direction.value, err.value
        ('BACKWARD', '1.5')
    """

    def guard(function: Callable[[Any], Any], direction: Direction) -> Callable[[Any], Result[Any, Any]]:
        def run(value: Any) -> Result[Any, Any]:
            def to_error(exc: Exception) -> Any:
                if error_mapper is not None:
                    return error_mapper(exc)
                return TransformError(
                    str(exc) or type(exc).__name__,
                    value=value,
                    direction=direction,
                    context=ErrorContext(transformer=name),
                    cause=exc,
                )

            return try_result_with(lambda: function(value), to_error)

        return run

    for role, function in (("forward", forward), ("backward", backward)):
        if not callable(function):
            raise InvalidTransformerError(
                f"{role} must be callable, got {type(function).__name__}",
                context=ErrorContext(transformer=name),
            )

    return ValueTransformer(
        guard(forward, Direction.FORWARD),
        guard(backward, Direction.BACKWARD),
        name=name,
    )


__all__ = [
    "ValueTransformer",
    "identity",
    "flip",
    "compose",
    "compose_all",
    "from_callables",
    "derive_name",
]
