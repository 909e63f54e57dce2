"""
Lifting transformers over richer shapes.

Three lifts extend transformation logic to containers:

    lift_mapping(mapping, default_a, default_b)   A <-> B from a lookup table
    lift_optional(t, default_b)                   A | None <-> B
    lift_sequence(t)                              Sequence[A] <-> list[B]

``lift`` picks one of them from the shape of its arguments.

The mapping and optional lifts turn "no match" into a default success; they
never fail on their own. The sequence lift fails with the first element
failure and processes nothing after it.

Examples:
    >>> numbers = lift_mapping({"one": 1, "two": 2}, "null", 0)
    >>> numbers.transformed_value("three")
    Ok(0)
    >>> numbers.reverse_transformed_value(3)
    Ok('null')
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from typing import Any, Callable, TypeVar

from transmute.core.errors import Direction, ErrorContext, InvalidTransformerError
from transmute.core.logging import get_logger
from transmute.core.result import Ok, Result
from transmute.core.transformer import ValueTransformer, derive_name


logger = get_logger(__name__)

A = TypeVar("A")
B = TypeVar("B")
E = TypeVar("E")

_MISSING = object()


def _reverse_index(
    pairs: tuple[tuple[Any, Any], ...],
) -> tuple[dict[Any, Any] | None, list[Any]]:
    """
    Map each value to its first key, and list the values held by several keys.

    Returns ``(None, [])`` when any value is unhashable; backward lookups then
    scan the entries instead and shared values are not reported.
    """
    index: dict[Any, Any] = {}
    shared: dict[Any, None] = {}
    for key, value in pairs:
        if not isinstance(value, Hashable):
            return None, []
        try:
            if value in index:
                shared[value] = None
            else:
                index[value] = key
        except TypeError:
            # Hashable by type, unhashable by content (a tuple holding a list)
            return None, []
    return index, list(shared)


def lift_mapping(
    mapping: Mapping[A, B],
    default_a: A,
    default_b: B,
    *,
    name: str | None = None,
) -> ValueTransformer[A, B, Any]:
    """
    Build a transformer from a lookup table.

    Forward returns the mapped value of a key, or ``default_b`` for anything
    that is not a key. Backward returns the key mapped to the queried value,
    or ``default_a`` when no key maps to it; this covers ``default_b``
    itself unless some key explicitly maps to it. Neither direction ever
    returns Err.

    Several keys may share a value. Backward then returns the first of them
    in the mapping's iteration order (insertion order for a dict).

    The mapping is copied, so mutating it afterwards does not change the
    transformer.

    Examples:
        >>> t = lift_mapping({"one": 1, "two": 2}, "null", 0)
        >>> t.transformed_value("one"), t.transformed_value("three")
        (Ok(1), Ok(0))
        >>> t.reverse_transformed_value(2), t.reverse_transformed_value(0)
        (Ok('two'), Ok('null'))
    """
    if not isinstance(mapping, Mapping):
        raise InvalidTransformerError(
            f"mapping must be a Mapping, got {type(mapping).__name__}",
            context=ErrorContext(transformer=name),
        )

    pairs = tuple(mapping.items())
    table = dict(pairs)
    index, shared = _reverse_index(pairs)

    logger.debug(
        "mapping_lifted",
        transformer=name,
        entries=len(pairs),
        shared_values=[repr(value) for value in shared],
        reverse_index=index is not None,
    )

    def forward(value: A) -> Result[B, Any]:
        try:
            return Ok(table.get(value, default_b))
        except TypeError:
            # Unhashable input cannot be a key
            return Ok(default_b)

    def backward(value: B) -> Result[A, Any]:
        key: Any
        if index is not None:
            try:
                key = index.get(value, _MISSING)
            except TypeError:
                key = _MISSING
        else:
            key = next((k for k, v in pairs if v == value), _MISSING)
        if key is _MISSING:
            return Ok(default_a)
        return Ok(key)

    return ValueTransformer(forward, backward, name=name or "mapping")


def lift_optional(
    transformer: ValueTransformer[A, B, E],
    default_b: B,
    *,
    name: str | None = None,
) -> ValueTransformer[A | None, B, E]:
    """
    Extend a transformer to accept ``None``.

    Forward maps ``None`` to ``Ok(default_b)`` and anything else through
    ``transformer``. Backward maps a value equal to ``default_b`` to
    ``Ok(None)`` without calling ``transformer`` at all, and anything else
    through ``transformer``, failures included.

    Examples:
        >>> t = lift_optional(ValueTransformer(lambda n: Ok(str(n)), lambda s: Ok(int(s))), "default")
        >>> t.transformed_value(None)
        Ok('default')
        >>> t.reverse_transformed_value("default")
        Ok(None)
        >>> t.reverse_transformed_value("8")
        Ok(8)
    """
    base_forward, base_backward = transformer.forward, transformer.backward

    def forward(value: A | None) -> Result[B, E]:
        if value is None:
            return Ok(default_b)
        return base_forward(value)

    def backward(value: B) -> Result[A | None, E]:
        if value == default_b:
            return Ok(None)
        return base_backward(value)

    return ValueTransformer(
        forward,
        backward,
        name=name or derive_name("{}?", transformer.name),
    )


def _each(
    function: Callable[[Any], Result[Any, Any]],
    direction: Direction,
    name: str | None,
) -> Callable[[Sequence[Any]], Result[list[Any], Any]]:
    def run(values: Sequence[Any]) -> Result[list[Any], Any]:
        transformed = []
        for index, value in enumerate(values):
            result = function(value)
            if result.is_err():
                logger.debug(
                    "sequence_element_failed",
                    transformer=name,
                    direction=direction.value,
                    index=index,
                )
                return result
            transformed.append(result.value)
        return Ok(transformed)

    return run


def lift_sequence(
    transformer: ValueTransformer[A, B, E],
    *,
    name: str | None = None,
) -> ValueTransformer[Sequence[A], list[B], E]:
    """
    Extend a transformer to whole sequences, element by element.

    Both directions return ``Ok(list)`` in input order when every element
    succeeds, or the first element's Err unchanged when one fails. Elements
    after a failure are not processed. An empty sequence gives ``Ok([])``.

    Examples:
        >>> t = lift_sequence(ValueTransformer(lambda n: Ok(str(n)), lambda s: Ok(int(s))))
        >>> t.transformed_value([9, 10])
        Ok(['9', '10'])
        >>> t.reverse_transformed_value([])
        Ok([])
    """
    name = name or derive_name("[{}]", transformer.name)
    return ValueTransformer(
        _each(transformer.forward, Direction.FORWARD, name),
        _each(transformer.backward, Direction.BACKWARD, name),
        name=name,
    )


def lift(source: Any, *defaults: Any, name: str | None = None) -> ValueTransformer[Any, Any, Any]:
    """
    Lift by argument shape.

    ========================================  ==================
    ``lift(mapping, default_a, default_b)``   lift_mapping
    ``lift(transformer, default_b)``          lift_optional
    ``lift(transformer)``                     lift_sequence
    ========================================  ==================

    Raises:
        InvalidTransformerError: the arguments match none of the shapes
    """
    if isinstance(source, ValueTransformer):
        if not defaults:
            return lift_sequence(source, name=name)
        if len(defaults) == 1:
            return lift_optional(source, defaults[0], name=name)
    elif isinstance(source, Mapping) and len(defaults) == 2:
        return lift_mapping(source, defaults[0], defaults[1], name=name)

    raise InvalidTransformerError(
        f"Cannot lift {type(source).__name__} with {len(defaults)} default(s)",
        context=ErrorContext(transformer=name),
    )


__all__ = [
    "lift",
    "lift_mapping",
    "lift_optional",
    "lift_sequence",
]
