"""
Visited Set Bit Field
=====================

Fixed-width set of junction ids backed by a single integer, one bit per
junction. Instances are values: every "mutating" operation returns a new
set, so sibling search branches never observe each other's changes and no
undo step is needed when backtracking.

Python integers are unbounded, so a width above 64 behaves identically;
the width exists to mirror the capacity check done at compaction time.
"""

from typing import Iterable, Iterator

from longtrail.core.definitions import DEFAULT_MAX_JUNCTIONS


class VisitedSet:
    """Immutable bit field over junction ids in [0, width)."""

    __slots__ = ('bits', 'width')

    def __init__(self, bits: int = 0, width: int = DEFAULT_MAX_JUNCTIONS):
        if bits < 0 or bits >> width:
            raise ValueError(f"Bit pattern {bits:#x} does not fit in {width} bits")
        self.bits = bits
        self.width = width

    @classmethod
    def of(cls, members: Iterable[int], width: int = DEFAULT_MAX_JUNCTIONS) -> 'VisitedSet':
        bits = 0
        for member in members:
            bits |= 1 << cls._check(member, width)
        return cls(bits, width)

    @staticmethod
    def _check(member: int, width: int) -> int:
        if not 0 <= member < width:
            raise IndexError(f"Junction id {member} outside bit field of width {width}")
        return member

    def __contains__(self, member: int) -> bool:
        return (self.bits >> member) & 1 == 1

    def add(self, member: int) -> 'VisitedSet':
        """Copy of this set with member inserted."""
        return VisitedSet(self.bits | (1 << self._check(member, self.width)), self.width)

    def discard(self, member: int) -> 'VisitedSet':
        """Copy of this set with member removed."""
        return VisitedSet(self.bits & ~(1 << self._check(member, self.width)), self.width)

    def union(self, other: 'VisitedSet') -> 'VisitedSet':
        return VisitedSet(self.bits | other.bits, max(self.width, other.width))

    __or__ = union

    def __iter__(self) -> Iterator[int]:
        bits = self.bits
        while bits:
            low = bits & -bits
            yield low.bit_length() - 1
            bits ^= low

    def __len__(self) -> int:
        return bin(self.bits).count('1')

    def __bool__(self) -> bool:
        return self.bits != 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, VisitedSet):
            return NotImplemented
        return self.bits == other.bits

    def __hash__(self) -> int:
        return hash(self.bits)

    def __repr__(self) -> str:
        return f"VisitedSet({sorted(self)})"
