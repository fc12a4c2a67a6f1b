"""Nickname aliases used by the first-name match.

The map is keyed by the name a user is expected to type. A contact matches
when its given name is one of the aliases listed under the searched name;
the reverse lookup is never made, so "bill" does not find "William" unless
"bill" is itself a key.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .utils import normalize_name

NicknameMap = Mapping[str, frozenset[str]]


def build_nickname_map(entries: Mapping[str, Iterable[str]]) -> NicknameMap:
    """Return a read-only, normalized copy of ``entries``."""
    table: dict[str, frozenset[str]] = {}
    for name, aliases in entries.items():
        key = normalize_name(name)
        if not key:
            continue
        merged = set(table.get(key, frozenset()))
        merged.update(normalize_name(a) for a in aliases if normalize_name(a))
        table[key] = frozenset(merged)
    return MappingProxyType(table)


def aliases_for(nicknames: NicknameMap, name: str) -> frozenset[str]:
    return nicknames.get(normalize_name(name), frozenset())


DEFAULT_NICKNAMES: NicknameMap = build_nickname_map(
    {
        "jonathan": ["jon", "john"],
        "william": ["bill", "will"],
        "robert": ["bob"],
        "michael": ["mike"],
        "katherine": ["kate", "kathy"],
    }
)

EMPTY_NICKNAMES: NicknameMap = MappingProxyType({})


__all__ = [
    "NicknameMap",
    "build_nickname_map",
    "aliases_for",
    "DEFAULT_NICKNAMES",
    "EMPTY_NICKNAMES",
]
