"""
Structured error types for transmute.

Provides a small hierarchy of typed errors carrying enough metadata to tell
which transformer failed, in which direction, and on which value.

Transformers report failure by returning ``Err(error)`` rather than raising,
and the error type is chosen by whoever builds the transformer. When the
caller has no error type of its own, TransmuteError and its subclasses are
the recommended choice: they carry a category, a structured context and an
optional chained cause, and serialize cleanly for structured logging.

Manifesto:
    - **Errors are values:** Transformers return Err, they do not raise
    - **Caller-owned taxonomy:** Any error type works; these are defaults
    - **Rich Context:** Transformer name, direction, element index
    - **Error Chaining:** Preserve original exceptions as cause

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       TransmuteError                             │
        │                (category, context, cause)                        │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  TransformError          InvalidTransformerError   ConfigError   │
        │  (TRANSFORM, value,      (VALIDATION)              (CONFIG)      │
        │   direction)                                          │          │
        │       │                  UnwrapError         InvalidConfigError  │
        │  ParseError              (INTERNAL)                              │
        │  (PARSE)                                                         │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    Reporting a failed conversion:

    >>> error = TransformError("not an integer", value="2.5",
    ...                        direction=Direction.BACKWARD)
    >>> error.category
    <ErrorCategory.TRANSFORM: 'TRANSFORM'>
    >>> error.to_dict()["value"]
    "'2.5'"

    Adding context fluently:

    >>> error = ParseError("bad digit").with_context(transformer="int<->str")
    >>> error.context.transformer
    'int<->str'

Guardrails:
    ❌ DON'T: Raise TransformError from inside a transformer closure
    ✅ DO: Return Err(TransformError(...))

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, transmute

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Direction(str, Enum):
    """Which half of a transformer produced a value or an error."""

    FORWARD = "FORWARD"
    BACKWARD = "BACKWARD"

    def reversed(self) -> Direction:
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification.

    Categories are coarse on purpose: a transformer failure is either a
    conversion that could not be performed (TRANSFORM, PARSE), misuse of the
    library (VALIDATION, CONFIG), or a bug (INTERNAL).

    Examples:
        >>> ErrorCategory.PARSE.value
        'PARSE'
        >>> TransmuteError("x", category=ErrorCategory.PARSE).category
        <ErrorCategory.PARSE: 'PARSE'>

    Attributes:
        TRANSFORM: A value could not be converted
        PARSE: Textual input did not parse
        VALIDATION: A transformer or lift was built with invalid arguments
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    TRANSFORM = "TRANSFORM"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only the fields that are set end up in ``to_dict()``, so a context can be
    attached to every error without cluttering log output.

    Examples:
        >>> ctx = ErrorContext(transformer="[int<->str]", index=1)
        >>> ctx.to_dict()
        {'transformer': '[int<->str]', 'index': 1}

        >>> ctx = ErrorContext()
        >>> ctx.metadata["unit"] = "cents"
        >>> ctx.to_dict()
        {'unit': 'cents'}

    Attributes:
        transformer: Name of the transformer that failed
        direction: FORWARD or BACKWARD
        index: Element index when the failure came from a sequence
        metadata: Additional key-value pairs
    """

    transformer: str | None = None
    direction: Direction | None = None
    index: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.transformer is not None:
            result["transformer"] = self.transformer
        if self.direction is not None:
            result["direction"] = self.direction.value
        if self.index is not None:
            result["index"] = self.index
        if self.metadata:
            result.update(self.metadata)
        return result


class TransmuteError(Exception):
    """
    Base exception for all transmute errors.

    Every TransmuteError carries:
    - **category:** ErrorCategory for classification
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` to give sensible defaults.

    Examples:
        >>> error = TransmuteError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     int("x")
        ... except ValueError as e:
        ...     error = TransmuteError("conversion failed", cause=e)
        >>> type(error.cause).__name__
        'ValueError'

        >>> TransmuteError("x", category=ErrorCategory.PARSE).to_dict()["category"]
        'PARSE'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TransmuteError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(TransformError("out of range", value=v).with_context(
                transformer="percent",
                unit="basis points",
            ))
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSFORMATION ERRORS
# =============================================================================


class TransformError(TransmuteError):
    """
    A value could not be transformed.

    The failing value and the direction are kept on the error so that a
    composed or lifted transformer still reports what actually went wrong.
    """

    default_category = ErrorCategory.TRANSFORM

    def __init__(
        self,
        message: str,
        *,
        value: Any = None,
        direction: Direction | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.value = value
        self.direction = direction
        if direction is not None and self.context.direction is None:
            self.context.direction = direction

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.direction is not None:
            result["direction"] = self.direction.value
        return result


class ParseError(TransformError):
    """Textual input could not be parsed into the target type."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# USAGE ERRORS
# =============================================================================


class InvalidTransformerError(TransmuteError):
    """
    A transformer or lift was built with invalid arguments.

    Raised, not returned: this signals a programming error at construction
    time, never a failed transformation.
    """

    default_category = ErrorCategory.VALIDATION


class UnwrapError(TransmuteError):
    """``unwrap()`` was called on an Err whose error is not an exception."""

    default_category = ErrorCategory.INTERNAL

    def __init__(self, error: Any):
        self.error = error
        super().__init__(f"Called unwrap() on Err({error!r})")


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(TransmuteError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Any) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, TransmuteError):
        return error.category
    # Map common conversion exceptions to categories
    if isinstance(error, (TypeError, ValueError, ArithmeticError, LookupError)):
        return ErrorCategory.TRANSFORM
    return ErrorCategory.UNKNOWN


__all__ = [
    "Direction",
    "ErrorCategory",
    "ErrorContext",
    "TransmuteError",
    "TransformError",
    "ParseError",
    "InvalidTransformerError",
    "UnwrapError",
    "ConfigError",
    "InvalidConfigError",
    "categorize_error",
]
