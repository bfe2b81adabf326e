"""Seeds: exact or near-exact hits between a read and a reference."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


def hamming(query: bytes, reference: bytes) -> int:
    """Count differing positions over the shorter of the two sequences."""
    return sum(a != b for a, b in zip(query, reference))


@dataclass
class Seed:
    """A hit of a query k-mer at a reference position."""

    rpos: int
    rval: int
    qpos: int
    mismatch: int
    length: int
    flag: int = 0

    @classmethod
    def from_flexmer(
        cls, qpos: int, rpos: int, reference: int, dist: int, k: int, c: int, f: int
    ) -> "Seed":
        """Build a seed from a flexible k-mer hit; inexact hits keep only the core."""
        if dist == 0:
            return cls(rpos=rpos, rval=reference, qpos=qpos, mismatch=0, length=k)
        half = f // 2
        return cls(rpos=rpos + half, rval=reference, qpos=qpos + half, mismatch=dist, length=c)

    @classmethod
    def from_coremer(cls, qpos: int, rpos: int, reference: int, c: int, f: int) -> "Seed":
        """Build a seed from a core-mer hit."""
        half = f // 2
        return cls(rpos=rpos + half, rval=reference, qpos=qpos + half, mismatch=0, length=c)

    def offset(self) -> int:
        return self.rpos - self.qpos

    def offsets(self, read_length: int) -> Tuple[int, int]:
        """Diagonal offsets for the forward and the reverse-complemented read."""
        return (
            self.rpos - self.qpos,
            self.rpos - (read_length - self.length - self.qpos),
        )

    def offset_dist(self, other: "Seed", read_length: int) -> int:
        oa1, oa2 = self.offsets(read_length)
        ob1, ob2 = other.offsets(read_length)
        return min(abs(oa1 - ob1), abs(oa1 - ob2), abs(oa2 - ob1), abs(oa2 - ob2))

    def closest_offset(self, other: "Seed", read_length: int) -> Tuple[int, bool, int]:
        """Return (offset, is_forward, distance) for the closer orientation."""
        self_fwd, self_rev = self.offsets(read_length)
        other_fwd, other_rev = other.offsets(read_length)
        diff_fwd = abs(self_fwd - other_fwd)
        diff_rev = abs(self_rev - other_rev)
        if diff_fwd < diff_rev:
            return self_fwd, True, diff_fwd
        return self_rev, False, diff_rev

    def reverse(self, read_length: int) -> "Seed":
        """The same seed placed on the reverse-complemented read."""
        qpos = read_length - self.length - self.qpos
        if qpos < 0:
            raise ValueError(f"seed does not fit a read of length {read_length}")
        return Seed(
            rpos=self.rpos, rval=self.rval, qpos=qpos,
            mismatch=self.mismatch, length=self.length,
        )

    def to_visual_string_x(self, read_length: Optional[int]) -> str:
        if read_length is None:
            return " " * self.qpos + "X" * self.length
        pad = read_length - self.length - self.qpos
        if pad < 0:
            raise ValueError(f"seed does not fit a read of length {read_length}")
        return " " * pad + "X" * self.length + " " * 10 + str(self)

    def to_visual_string(self, read: bytes) -> str:
        part = read[self.qpos:self.qpos + self.length]
        if isinstance(part, str):
            return " " * self.qpos + part
        return " " * self.qpos + bytes(part).decode("utf-8", errors="replace")

    def __str__(self) -> str:
        return (
            f"reference: {self.rval}  rpos: {self.rpos},  qpos: {self.qpos}, "
            f"mismatch: {self.mismatch}, length: {self.length}, "
            f"offsets: {self.offsets(150)}"
        )


class SeedOverlap(Enum):
    """How a seed lies relative to another along the query."""

    OFFSET_FWD_OTHER = auto()
    OFFSET_FWD_SELF = auto()
    CONTAINED_OTHER = auto()
    CONTAINED_SELF = auto()
    NO_OVERLAP = auto()


@dataclass
class AnchorSeed:
    """An exact match block inside an anchor."""

    qpos: int
    rpos: int
    length: int

    def qbegin(self) -> int:
        return self.qpos

    def qend(self) -> int:
        return self.qpos + self.length

    def rbegin(self) -> int:
        return self.rpos

    def rend(self) -> int:
        return self.rpos + self.length

    def qrange(self) -> range:
        return range(self.qpos, self.qpos + self.length)

    def rrange(self) -> range:
        return range(self.rpos, self.rpos + self.length)

    def extend_left(self, by: int) -> None:
        if by > self.qpos or by > self.rpos:
            raise ValueError(f"cannot extend seed left by {by}")
        self.qpos -= by
        self.rpos -= by
        self.length += by

    def extend_right(self, by: int) -> None:
        self.length += by

    def set(self, other: "AnchorSeed") -> None:
        self.qpos = other.qpos
        self.rpos = other.rpos
        self.length = other.length

    def merge_into(self, other: "AnchorSeed") -> bool:
        """Grow this seed by an overlapping one; return whether they overlap."""
        self_start = self.qpos
        self_end = self.qpos + self.length
        other_start = other.qpos
        other_end = other.qpos + other.length
        has_overlap = False

        if self_start <= other_start <= self_end and other_end > self_end:
            self.length += other_end - self_end
            has_overlap = True
        if other_start < self_start and self_start <= other_end <= self_end:
            self.qpos = other.qpos
            self.rpos = other.rpos
            self.length += other_start - self_start
            has_overlap = True
        if other_start >= self_start and other_end <= self_end:
            has_overlap = True
        return has_overlap

    def contains(self, other: "AnchorSeed") -> bool:
        return self.qbegin() <= other.qbegin() and self.qend() >= other.qend()

    def rpos_sorted_merge_into(self, other: "AnchorSeed") -> SeedOverlap:
        """Merge a seed that follows this one in reference order."""
        if other.qpos < self.qpos:
            print("Weird!!!", file=sys.stderr)
        if not (other.qpos >= self.qpos or other.length > self.length):
            raise ValueError("seed precedes and is not longer than the one it merges into")

        self_start = self.qpos
        self_end = self.qpos + self.length
        other_start = other.qpos
        other_end = other.qpos + other.length

        if other_start >= self_start and other_end <= self_end:
            return SeedOverlap.CONTAINED_OTHER
        if self_start <= other_start <= self_end and other_end > self_end:
            self.length += other_end - self_end
            return SeedOverlap.OFFSET_FWD_OTHER
        if self_start >= other_start and self_end <= other_end:
            self.qpos = other.qpos
            self.length = other.length
            return SeedOverlap.CONTAINED_SELF
        return SeedOverlap.NO_OVERLAP

    def reverse(self, read_length: int) -> None:
        """Move this seed onto the reverse-complemented read."""
        qpos = read_length - self.length - self.qpos
        if qpos < 0:
            raise ValueError(f"seed does not fit a read of length {read_length}")
        self.qpos = qpos

    def offset(self) -> int:
        return self.qbegin() - self.rbegin()

    def offsets(self, read_length: int) -> Tuple[int, int]:
        return (
            self.rbegin() - self.qbegin(),
            self.rbegin() - (read_length - self.length - self.qbegin()),
        )

    def __str__(self) -> str:
        return f"qpos: {self.qpos}, rpos: {self.rpos}, length: {self.length}"