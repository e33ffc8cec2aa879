"""Exceptions raised by objutil."""

from __future__ import annotations


class InvalidArgument(TypeError):
    """A mandatory argument is missing or has an unusable type.

    Subclasses TypeError so callers catching the builtin keep working.
    """
