"""
Multiset counting used to check that a partition is a permutation.

A `Multiset` maps each value to its number of occurrences. Values never seen
have count 0. Two multisets are equal iff every value present in either one
has the same count in both.

Public API (stable):
    Multiset.from_iterable(values) -> Multiset
    build(values: Iterable) -> Multiset
    count(m: Multiset, value) -> int
    equals(a: Multiset, b: Multiset) -> bool
"""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Iterator, Tuple, TypeVar

T = TypeVar("T", bound=Hashable)

__all__ = ["Multiset", "build", "count", "equals"]


class Multiset(Generic[T]):
    """Value -> occurrence count."""

    __slots__ = ("_counts",)

    def __init__(self) -> None:
        self._counts: Dict[T, int] = {}

    @classmethod
    def from_iterable(cls, values: Iterable[T]) -> "Multiset[T]":
        m: Multiset[T] = cls()
        m.insert_all(values)
        return m

    def insert(self, value: T) -> None:
        if value in self._counts:
            self._counts[value] += 1
        else:
            self._counts[value] = 1

    def insert_all(self, values: Iterable[T]) -> None:
        for v in values:
            self.insert(v)

    def get(self, value: T) -> int:
        return self._counts.get(value, 0)

    count = get

    def total(self) -> int:
        """Number of elements counted, duplicates included."""
        return sum(self._counts.values())

    def _included_in(self, other: "Multiset[T]") -> bool:
        # Keys absent from `other` have count 0 there, never equal to a stored count >= 1.
        for k, c in self._counts.items():
            if other._counts.get(k, 0) != c:
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Multiset):
            return NotImplemented
        # One direction alone misses keys that only `other` holds.
        return self._included_in(other) and other._included_in(self)

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[Tuple[T, int]]:
        return iter(self._counts.items())

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, value: object) -> bool:
        return value in self._counts

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {c}" for k, c in self._counts.items())
        return f"Multiset({{{body}}})"


def build(values: Iterable[T]) -> Multiset[T]:
    """Count every element of `values` in a single pass."""
    return Multiset.from_iterable(values)


def count(m: Multiset[T], value: T) -> int:
    return m.get(value)


def equals(a: Multiset[T], b: Multiset[T]) -> bool:
    return a == b
