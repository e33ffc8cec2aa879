"""Declarative instructions understood by `assign_within` and `convert`.

Callers may pass loose instructions (bare keys, tuples, lists); they are
resolved once into the tagged rules below before any mapping is touched.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RuleKind(Enum):
    """Shape of a resolved instruction."""

    KEY_ONLY = "key_only"  # copy/keep the value under the same key
    KEY_TARGET_CONVERTER = "key_target_converter"  # rename and/or run a converter
    KEY_LITERAL = "key_literal"  # replace the value with a fixed literal


@dataclass(frozen=True)
class RemapRule:
    """Copy `source` from one mapping to `target` in another.

    Attributes:
        source: Key read from the source mapping.
        target: Key written in the target mapping. None disables the rule.
        converter: Optional callable applied to the source value.
        kind: KEY_ONLY when the rule copies a value unchanged under its own key,
            otherwise KEY_TARGET_CONVERTER.
    """

    source: Any
    target: Any
    converter: Callable[[Any], Any] | None = None
    kind: RuleKind = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.converter is not None and not callable(self.converter):
            object.__setattr__(self, "converter", None)
        plain_copy = self.converter is None and _same_key(self.source, self.target)
        object.__setattr__(self, "kind", RuleKind.KEY_ONLY if plain_copy else RuleKind.KEY_TARGET_CONVERTER)

    @classmethod
    def parse(cls, item: Any) -> RemapRule | None:
        """Resolve a loose remap instruction.

        - `"a"` copies `a` to `a`
        - `("a", "x")` copies `a` to `x`
        - `("a", "x", fn)` copies `fn(a)` to `x`; a non-callable `fn` is ignored
        - `("a",)` has no target and is kept as a disabled rule

        Returns None when the instruction cannot name a source key at all.
        """
        if isinstance(item, RemapRule):
            return item
        if isinstance(item, list | tuple):
            if not item:
                return None
            source = item[0]
            target = item[1] if len(item) > 1 else None
            converter = item[2] if len(item) > 2 else None
            return cls(source, target, converter)
        return cls(item, item)

    def apply(self, value: Any) -> Any:
        if self.kind is RuleKind.KEY_ONLY or self.converter is None:
            return value
        return self.converter(value)


@dataclass(frozen=True)
class ConvertRule:
    """Replace the value under `key`, either through a callable or with a literal."""

    key: Hashable
    converter: Any = None
    kind: RuleKind = field(init=False, compare=False)

    def __post_init__(self) -> None:
        kind = RuleKind.KEY_TARGET_CONVERTER if callable(self.converter) else RuleKind.KEY_LITERAL
        object.__setattr__(self, "kind", kind)

    @classmethod
    def parse(cls, item: Any) -> ConvertRule | None:
        """Resolve a `(key, converter_or_literal)` pair.

        A one-element pair replaces the value with None. Anything that is not a
        non-empty list/tuple (or a ConvertRule) resolves to None.
        """
        if isinstance(item, ConvertRule):
            return item
        if isinstance(item, list | tuple) and item:
            return cls(item[0], item[1] if len(item) > 1 else None)
        return None

    def apply(self, value: Any) -> Any:
        if self.kind is RuleKind.KEY_TARGET_CONVERTER:
            return self.converter(value)
        return self.converter


def _same_key(a: Any, b: Any) -> bool:
    return a is b or bool(a == b)
