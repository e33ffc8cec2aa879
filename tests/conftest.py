from __future__ import annotations

from collections import ChainMap
from copy import deepcopy

import pytest

from objutil import Record


class Sym:
    """Opaque non-string key, the counterpart of a JavaScript symbol."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Sym({self.name!r})"


BASE_SOURCE: dict = {"a": 1, "b": 2, "c": 3}


@pytest.fixture()
def source() -> dict:
    return deepcopy(BASE_SOURCE)


@pytest.fixture()
def sym() -> Sym:
    return Sym("sym")


@pytest.fixture()
def mixed_keys(sym: Sym) -> dict:
    """Dict whose insertion order interleaves string and non-string keys."""
    return {sym: "nm", "a": "ax", 3: "three", "b": "bj"}


@pytest.fixture()
def hidden_record() -> Record:
    """Record with one visible and one hidden key."""
    return Record({"id": 7, "token": "secret"}, hidden=["token"])


@pytest.fixture()
def inherited_chain() -> ChainMap:
    """ChainMap owning `own`, inheriting `inherited` and a shadowed `shared`."""
    return ChainMap({"own": 1, "shared": "own"}, {"inherited": 2, "shared": "parent"})


@pytest.fixture()
def duplicated_numbers() -> list[int]:
    return [1, 2, 2, 3, 2, 1, 2, 2, 3]
