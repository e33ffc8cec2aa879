"""
Object Utilities Package

Small, shallow helpers for everyday mapping and sequence chores: selective
field copy, field conversion, pruning, deduplication, key aliasing and
date formatting.
"""

from .data_structures import (
    HOLE,
    alias,
    assign_within,
    assign_without,
    convert,
    dedup,
    deempty,
    deundefined,
    own_keys,
)
from .date import DateLike, DateParts, padding, read_date, to_datetime
from .exceptions import InvalidArgument
from .records import Record, has_own, is_enumerable, own_layer
from .rules import ConvertRule, RemapRule, RuleKind

__version__ = "0.1.0"
__all__ = [
    # Mapping helpers
    "own_keys",
    "assign_within",
    "assign_without",
    "convert",
    "deundefined",
    "deempty",
    "alias",
    # Sequence helpers
    "dedup",
    "HOLE",
    # Records and rules
    "Record",
    "own_layer",
    "has_own",
    "is_enumerable",
    "RuleKind",
    "RemapRule",
    "ConvertRule",
    # Date helpers
    "DateLike",
    "DateParts",
    "to_datetime",
    "read_date",
    "padding",
    # Errors
    "InvalidArgument",
]
