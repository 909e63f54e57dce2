"""
Shared pytest fixtures for transmute tests.

This module provides:
- The int<->str base transformer used throughout the transformer tests
- Logging (structlog and stdlib) and settings isolation between tests
"""

import logging

import pytest
import structlog

from transmute.core.errors import Direction, ParseError
from transmute.core.result import Err, Ok, Result
from transmute.core.settings import get_settings
from transmute.core.transformer import ValueTransformer


def _to_string(value: int) -> Result[str, ParseError]:
    return Ok(str(value))


def _to_int(value: str) -> Result[int, ParseError]:
    try:
        return Ok(int(value))
    except ValueError as e:
        return Err(ParseError(f"not an integer: {value!r}", value=value,
                              direction=Direction.BACKWARD, cause=e))


# =============================================================================
# Transformer Fixtures
# =============================================================================


@pytest.fixture
def string_transformer() -> ValueTransformer[int, str, ParseError]:
    """int -> str forward, str -> int backward; backward fails on non-integers."""
    return ValueTransformer(_to_string, _to_int, name="int<->str")


@pytest.fixture
def recording_transformer():
    """
    Identity-like transformer that records every call.

    Returns (transformer, calls) where calls is a list of
    (direction, value) tuples. Values equal to "bad" fail.
    """
    calls: list[tuple[str, object]] = []

    def make(direction: str):
        def run(value):
            calls.append((direction, value))
            if value == "bad":
                return Err(ValueError(f"{direction}: bad"))
            return Ok(value)

        return run

    return ValueTransformer(make("forward"), make("backward"), name="recorder"), calls


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Each test starts from structlog's default configuration."""
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_stdlib_logging():
    """Undo handlers and levels that configure_logging sets on stdlib loggers."""
    root = logging.getLogger()
    library = logging.getLogger("transmute")
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    library.setLevel(logging.NOTSET)
