"""Shallow mapping and sequence helpers.

Provides `own_keys` to list every own key of a mapping, hidden ones included.

Provides `assign_within`, `assign_without` and `convert` to copy, filter and
rewrite top-level fields through small declarative instruction lists.

Provides `deundefined` and `deempty` to prune None values and empty nested
mappings in place, and `alias` to expose a value under extra key names.

Provides `dedup` to drop duplicate values from a sequence while keeping the
order of first occurrences, either into a new list or in place.

All helpers are permissive: malformed instructions, a missing source or a
non-sequence instruction list turn the call into a no-op. Only a missing
target mapping raises `InvalidArgument`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable, Iterable, Iterator, Mapping, MutableMapping, MutableSequence, Sequence
from enum import Enum
from typing import Any

from .exceptions import InvalidArgument
from .records import Record, has_own, is_enumerable, own_layer
from .rules import ConvertRule, RemapRule

logger = logging.getLogger(__name__)


class _Marker(Enum):
    HOLE = "hole"
    BOOL = "bool"
    NAN = "nan"


# Tombstone for an unassigned slot in a sequence; `dedup` collapses it
HOLE = _Marker.HOLE


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, Sequence) and not isinstance(obj, str | bytes | bytearray)


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def own_keys(mapping: Mapping) -> list[Hashable]:
    """Return all own keys of a mapping, visible or hidden.

    String keys come first, then every other key; each group keeps insertion
    order. Inherited keys (parent maps of a ChainMap) are never listed.

    Examples:
        >>> own_keys({1: "one", "a": 1, "b": 2})
        ['a', 'b', 1]

        >>> from collections import ChainMap
        >>> own_keys(ChainMap({"own": 1}, {"inherited": 2}))
        ['own']
    """
    layer = own_layer(mapping)
    keys = layer.own_keys() if isinstance(layer, Record) else list(layer)
    return [k for k in keys if isinstance(k, str)] + [k for k in keys if not isinstance(k, str)]


def assign_within(
    target: MutableMapping | None,
    source: Mapping | None,
    instructions: Sequence[Any] | None,
) -> MutableMapping:
    """Copy selected visible own fields of `source` into `target`.

    Args:
        target: Mapping to write into. Must not be None.
        source: Mapping to read from. None makes the call a no-op.
        instructions: Ordered remap instructions. Each one is a bare key, a
            `(source_key, target_key)` pair, a `(source_key, target_key, converter)`
            triple or a `RemapRule`. Anything but a list/tuple makes the call a no-op.

    Returns:
        The same `target` object. Later instructions overwrite earlier ones that
        write the same target key.

    Raises:
        InvalidArgument: If target is None.

    Notes:
        - Source keys that are missing, inherited or hidden are skipped.
        - Instructions whose target key is None are skipped.
        - Instructions whose target key is unhashable are skipped.

    Examples:
        >>> assign_within({}, {"a": 1, "b": 2, "c": 3}, ["a", ("b", "x"), ("c", "c", lambda v: v + 1)])
        {'a': 1, 'x': 2, 'c': 4}
    """
    if target is None:
        raise InvalidArgument("assign_within() target cannot be None")
    if source is None or not _is_sequence(instructions):
        return target

    for item in instructions:
        rule = RemapRule.parse(item)
        if rule is None:
            logger.debug("assign_within: skipping unresolvable instruction %r", item)
            continue
        if rule.target is None or not is_enumerable(source, rule.source):
            continue
        if not _is_hashable(rule.target):
            logger.debug("assign_within: skipping unhashable target key %r", rule.target)
            continue
        target[rule.target] = rule.apply(source.get(rule.source))
    return target


def assign_without(
    target: MutableMapping | None,
    source: Mapping | None,
    excluded_keys: Sequence[Any] | None,
) -> MutableMapping:
    """Copy every visible own field of `source` into `target` except `excluded_keys`.

    Args:
        target: Mapping to write into. Must not be None.
        source: Mapping to read from. None makes the call a no-op.
        excluded_keys: Keys to leave out. Anything but a list/tuple makes the call a no-op.

    Returns:
        The same `target` object.

    Raises:
        InvalidArgument: If target is None.

    Examples:
        >>> assign_without({}, {"a": 1, "b": 2, "c": 3}, ["c"])
        {'a': 1, 'b': 2}
    """
    if target is None:
        raise InvalidArgument("assign_without() target cannot be None")
    if source is None or not _is_sequence(excluded_keys):
        return target

    for key in own_keys(source):
        if is_enumerable(source, key) and key not in excluded_keys:
            target[key] = source.get(key)
    return target


def convert(mapping: MutableMapping, instructions: Sequence[Any]) -> MutableMapping:
    """Rewrite own fields of `mapping` in place.

    Each instruction is a `(key, converter)` pair or a `ConvertRule`. A callable
    converter receives the current value and its result is stored; any other
    converter value is stored as-is. Pairs with a falsy key, keys the mapping
    does not own and non-pair instructions are skipped.

    Examples:
        >>> convert({"a": 1, "b": 2}, [("a", 10), ("b", lambda v: -v), ("z", 0)])
        {'a': 10, 'b': -2}
    """
    if not _is_sequence(instructions):
        return mapping

    for item in instructions:
        rule = ConvertRule.parse(item)
        if rule is None:
            logger.debug("convert: skipping malformed instruction %r", item)
            continue
        if not rule.key or not has_own(mapping, rule.key):
            continue
        mapping[rule.key] = rule.apply(mapping.get(rule.key))
    return mapping


def deundefined(mapping: MutableMapping) -> MutableMapping:
    """Delete own keys whose value is None. Returns the same mapping.

    Examples:
        >>> deundefined({"a": 1, "b": None})
        {'a': 1}
    """
    layer = own_layer(mapping)
    for key in own_keys(mapping):
        if layer.get(key) is None:
            del layer[key]
    return mapping


def deempty(mapping: MutableMapping) -> MutableMapping:
    """Delete own keys whose value is a mapping without own keys.

    Only genuine mappings qualify: empty lists, sets, strings and other objects
    are kept. Nested mappings are not pruned themselves, so a mapping that only
    holds empty mappings survives.

    Examples:
        >>> deempty({"a": 1, "b": {}, "c": [], "d": {"x": 1}})
        {'a': 1, 'c': [], 'd': {'x': 1}}
    """
    layer = own_layer(mapping)
    for key in own_keys(mapping):
        value = layer.get(key)
        if isinstance(value, Mapping) and not own_keys(value):
            del layer[key]
    return mapping


def alias(
    mapping: MutableMapping,
    props: Mapping[Hashable, Hashable | list[Hashable] | tuple[Hashable, ...]],
    *,
    getter: bool = False,
) -> MutableMapping:
    """Expose values of `mapping` under additional key names.

    Args:
        mapping: Mapping to extend in place.
        props: Source key -> alias name, or a list/tuple of alias names.
        getter: When False, each alias receives a copy of the current value
            (None if the source key is missing). When True, each alias is linked
            to the source key's slot, so later reads and writes through either
            name see the same value. Linking needs a `Record`.

    Returns:
        The same mapping.

    Raises:
        InvalidArgument: If getter=True and the mapping is not a Record.

    Examples:
        >>> alias({"a": 1, "b": 2}, {"a": "alpha", "b": ["beta", "Beta"]})
        {'a': 1, 'b': 2, 'alpha': 1, 'beta': 2, 'Beta': 2}
    """
    layer = own_layer(mapping)
    if getter and not isinstance(layer, Record):
        raise InvalidArgument("alias(getter=True) requires a Record")

    for source_key in props:
        names = props[source_key]
        for name in names if isinstance(names, list | tuple) else [names]:
            if getter:
                layer.link(name, source_key)
            else:
                mapping[name] = mapping.get(source_key)
    return mapping


def _first_occurrences(values: Iterable[Any]) -> Iterator[Any]:
    """Yield each distinct value once, in order of first appearance, skipping holes.

    Equality is strict: True/False never match 1/0 or 1.0/0.0, and NaN matches NaN.
    Unhashable values are compared with == against earlier unhashable values.
    """
    seen: set[Any] = set()
    seen_unhashable: list[Any] = []
    for value in values:
        if value is HOLE:
            continue
        if isinstance(value, bool):
            marker: Any = (_Marker.BOOL, value)
        elif isinstance(value, float) and math.isnan(value):
            marker = _Marker.NAN
        else:
            marker = value
        try:
            if marker in seen:
                continue
            seen.add(marker)
        except TypeError:
            if any(value == other for other in seen_unhashable):
                continue
            seen_unhashable.append(value)
        yield value


def dedup(sequence: Sequence[Any], in_place: bool = False) -> list[Any] | None:
    """Remove duplicate values, keeping the order of first occurrences.

    Args:
        sequence: Values to deduplicate. May contain `HOLE` tombstones, which are dropped.
            None is treated as an empty sequence.
        in_place: When False, return a new list and leave `sequence` untouched.
            When True, compact `sequence` itself (a mutable sequence is required)
            and return None; sequences shorter than 2 are left as they are.

    Returns:
        A new list in copy mode, None in in-place mode.

    Examples:
        >>> arr = [1, 2, 2, 3, 2, 1, 2, 2, 3]
        >>> dedup(arr)
        [1, 2, 3]
        >>> arr
        [1, 2, 2, 3, 2, 1, 2, 2, 3]

        >>> dedup(arr, True)
        >>> arr
        [1, 2, 3]
    """
    if sequence is None:
        return None if in_place else []
    if not in_place:
        return list(_first_occurrences(sequence))

    if len(sequence) < 2:
        return None
    if not isinstance(sequence, MutableSequence):
        raise TypeError("dedup(in_place=True) requires a mutable sequence")

    # Kept values are packed to the front; the write cursor never passes the read index
    write = 0
    for value in _first_occurrences(sequence[i] for i in range(len(sequence))):
        sequence[write] = value
        write += 1
    if write < len(sequence):
        del sequence[write:]
    return None
