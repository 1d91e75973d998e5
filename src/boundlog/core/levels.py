"""Severity levels and name/rank resolution."""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Union

from boundlog.exceptions import InvalidLevelError


class Level(IntEnum):
    """Severity ranks, ordered from ALL (admits everything) to OFF (admits nothing)."""

    ALL = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARNING = 4
    ERROR = 5
    CRITICAL = 6
    OFF = 7


# A level given either by its canonical name or by its numeric rank.
LevelSpec = Union[str, int]


class LevelRegistry:
    """Immutable bidirectional mapping between level names and ranks."""

    def __init__(self) -> None:
        self._by_rank: Mapping[int, str] = MappingProxyType({lvl.value: lvl.name for lvl in Level})
        self._by_name: Mapping[str, Level] = MappingProxyType({lvl.name: lvl for lvl in Level})
        self._range = (min(Level), max(Level))

    @property
    def by_rank(self) -> Mapping[int, str]:
        return self._by_rank

    @property
    def by_name(self) -> Mapping[str, Level]:
        return self._by_name

    @property
    def range(self) -> tuple[Level, Level]:
        return self._range

    def rank_of(self, spec: LevelSpec) -> Level:
        """Resolve a level name or rank to a Level.

        A rank already within [ALL, OFF] comes back unchanged (as the equal
        Level member); names are matched case-insensitively.
        """
        if isinstance(spec, bool):
            raise InvalidLevelError(spec)
        if isinstance(spec, int):
            low, high = self._range
            if low <= spec <= high:
                return Level(spec)
            raise InvalidLevelError(spec)
        if isinstance(spec, str):
            level = self._by_name.get(spec.strip().upper())
            if level is None:
                raise InvalidLevelError(spec)
            return level
        raise InvalidLevelError(spec)

    def name_of(self, rank: int) -> str:
        """Return the canonical name for a rank."""
        if isinstance(rank, bool) or not isinstance(rank, int) or rank not in self._by_rank:
            raise InvalidLevelError(rank)
        return self._by_rank[rank]

    def names(self) -> list[str]:
        return [self._by_rank[r] for r in sorted(self._by_rank)]

    def ranks(self) -> list[Level]:
        return sorted(self._by_name.values())


REGISTRY = LevelRegistry()

rank_of = REGISTRY.rank_of
name_of = REGISTRY.name_of
