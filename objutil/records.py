"""Mapping with per-key visibility and linked aliases.

`Record` gives Python mappings the two object features the helpers in
`objutil.data_structures` care about:

- hidden keys: own keys that are readable by subscript but skipped by
  iteration, `len()`, `keys()` and `items()` (non-enumerable keys);
- linked keys: an alias that shares the backing slot of another key, so reads
  and writes through the alias reach the source key.

`own_layer` and `is_enumerable` answer "which keys belong to this mapping" for
any mapping: a `collections.ChainMap` owns only its first map, a `Record` owns
hidden keys too, and every other mapping owns exactly the keys it iterates.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Hashable, Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class _Link:
    """Slot placeholder pointing at the key that actually holds the value."""

    target: Hashable


class Record(MutableMapping):
    """Insertion-ordered mapping with hidden keys and linked aliases.

    Args:
        data: Initial items, a mapping or an iterable of (key, value) pairs.
        hidden: Keys to mark hidden after the initial items are stored.
        **kwargs: Extra string-keyed items, stored after `data`.

    Examples:
        >>> rec = Record({"id": 1, "token": "abc"}, hidden=["token"])
        >>> dict(rec)
        {'id': 1}
        >>> rec["token"]
        'abc'
        >>> rec.own_keys()
        ['id', 'token']

        >>> rec.link("ident", "id")
        >>> rec["ident"] = 2
        >>> rec["id"]
        2
    """

    def __init__(
        self,
        data: Mapping[Hashable, Any] | Iterable[tuple[Hashable, Any]] | None = None,
        /,
        *,
        hidden: Iterable[Hashable] = (),
        **kwargs: Any,
    ) -> None:
        self._data: dict[Hashable, Any] = {}
        self._hidden: set[Hashable] = set()
        if data is not None:
            self.update(data)
        if kwargs:
            self.update(kwargs)
        for key in hidden:
            self.hide(key)

    # MutableMapping protocol: iteration and len() only see visible keys
    def __getitem__(self, key: Hashable) -> Any:
        return self._data[self._resolve(key)]

    def __setitem__(self, key: Hashable, value: Any) -> None:
        self._data[self._resolve(key)] = value

    def __delitem__(self, key: Hashable) -> None:
        del self._data[key]
        self._hidden.discard(key)

    def __iter__(self) -> Iterator[Hashable]:
        return (key for key in list(self._data) if key not in self._hidden)

    def __len__(self) -> int:
        return len(self._data) - len(self._hidden)

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._data
        except TypeError:
            return False

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self._data[k]!r}" for k in self._data)
        hidden = f", hidden={sorted(self._hidden, key=repr)!r}" if self._hidden else ""
        return f"{type(self).__name__}({{{items}}}{hidden})"

    def _resolve(self, key: Hashable) -> Hashable:
        """Follow links from `key` to the key that stores the value."""
        seen = {key}
        slot = self._data.get(key)
        while isinstance(slot, _Link):
            key = slot.target
            if key in seen:
                raise KeyError(f"circular link through {key!r}")
            seen.add(key)
            slot = self._data.get(key)
        return key

    # Own-key introspection
    def own_keys(self) -> list[Hashable]:
        """Return every own key, hidden ones included, in insertion order."""
        return list(self._data)

    def has_own(self, key: Hashable) -> bool:
        return key in self

    def is_hidden(self, key: Hashable) -> bool:
        return key in self._hidden

    def hide(self, key: Hashable) -> None:
        """Mark an existing key hidden. Raises KeyError for unknown keys."""
        if key not in self._data:
            raise KeyError(key)
        self._hidden.add(key)

    def show(self, key: Hashable) -> None:
        if key not in self._data:
            raise KeyError(key)
        self._hidden.discard(key)

    def link(self, alias: Hashable, key: Hashable) -> None:
        """Make `alias` share the slot of `key`.

        The alias is a visible own key. Deleting it removes only the link;
        deleting `key` leaves the alias dangling, and reading it raises KeyError.
        """
        if alias == key:
            return
        self._hidden.discard(alias)
        self._data[alias] = _Link(key)

    def is_link(self, key: Hashable) -> bool:
        return isinstance(self._data.get(key), _Link)


def own_layer(mapping: Mapping) -> Mapping:
    """Return the part of `mapping` that holds its own keys.

    For a ChainMap the parent maps are inherited, so only `maps[0]` counts.
    """
    if isinstance(mapping, ChainMap):
        return mapping.maps[0]
    return mapping


def has_own(mapping: Mapping, key: Any) -> bool:
    """Return True when `key` is an own key of `mapping`, hidden or not."""
    layer = own_layer(mapping)
    try:
        return key in layer
    except TypeError:
        # unhashable keys are never present
        return False


def is_enumerable(mapping: Mapping, key: Any) -> bool:
    """Return True when `key` is a visible own key of `mapping`."""
    if not has_own(mapping, key):
        return False
    layer = own_layer(mapping)
    if isinstance(layer, Record):
        return not layer.is_hidden(key)
    return True
