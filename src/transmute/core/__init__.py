"""Transmute Core -- generic machinery for bidirectional value transformers.

Manifesto:
    Converting between representations (wire strings and numbers, codes and
    enums, raw rows and records) is easy in one direction and routinely
    forgotten in the other. A ValueTransformer keeps both directions in one
    value, reports failure as a Result instead of raising, and combines
    with other transformers algebraically.

    ``transmute.core`` defines no concrete conversions. It provides the
    machinery callers build theirs from.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (TransmuteError, TransformError)
        result.py          Result[T, E] envelope (Ok / Err / collect_results)

    Layer 2 -- Transformers
        transformer.py     ValueTransformer, identity, flip, compose, from_callables
        lift.py            lift over mappings, optionals and sequences

    Layer 3 -- Cross-Cutting Concerns
        logging.py         Structured logging (structlog)
        settings.py        TransmuteSettings (pydantic-settings)

Tags:
    transmute, value-transformer, result-pattern, functional-programming

Doc-Types:
    package-overview, architecture-map, module-index
"""

from transmute.core.errors import (
    ConfigError,
    Direction,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    InvalidTransformerError,
    ParseError,
    TransformError,
    TransmuteError,
    UnwrapError,
    categorize_error,
)
from transmute.core.lift import lift, lift_mapping, lift_optional, lift_sequence
from transmute.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)
from transmute.core.result import (
    Err,
    Ok,
    Result,
    collect_results,
    from_optional,
    partition_results,
    try_result,
    try_result_with,
)
from transmute.core.settings import TransmuteSettings, get_settings
from transmute.core.transformer import (
    ValueTransformer,
    compose,
    compose_all,
    flip,
    from_callables,
    identity,
)

__all__ = [
    # Errors
    "ConfigError",
    "Direction",
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "InvalidTransformerError",
    "ParseError",
    "TransformError",
    "TransmuteError",
    "UnwrapError",
    "categorize_error",
    # Result
    "Err",
    "Ok",
    "Result",
    "collect_results",
    "from_optional",
    "partition_results",
    "try_result",
    "try_result_with",
    # Transformers
    "ValueTransformer",
    "compose",
    "compose_all",
    "flip",
    "from_callables",
    "identity",
    # Lifts
    "lift",
    "lift_mapping",
    "lift_optional",
    "lift_sequence",
    # Logging
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "unbind_context",
    # Settings
    "TransmuteSettings",
    "get_settings",
]
