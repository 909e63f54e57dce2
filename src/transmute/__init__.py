"""
Transmute - Bidirectional value transformers.

Re-exports the public API of ``transmute.core`` so that callers can write
``from transmute import ValueTransformer, Ok, Err, lift``.
"""

__version__ = "0.1.0"

from transmute.core import *  # noqa
