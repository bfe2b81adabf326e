"""Anchors: chains of colinear seeds tying a read to one reference."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple

from .seeds import AnchorSeed, Seed, SeedOverlap

RangePair = Tuple[range, range]


def _non_negative(value: int, what: str) -> int:
    if value < 0:
        raise ValueError(f"{what} is negative: {value}")
    return value


class AnchorSeedConfig(Enum):
    """Which read strand and seed placement make a seed match the reference."""

    QUERY_SEED = auto()
    QUERY_SEED_RC = auto()
    QUERY_RC_SEED = auto()
    QUERY_RC_SEED_RC = auto()
    NONE = auto()


@dataclass
class Anchor:
    """Seeds of one read on one reference, in query order."""

    reference: int = 0
    seed_count: int = 0
    mismatches: int = 0
    forward: bool = True
    orientation_set: bool = False
    flagged_for_indel: bool = False
    flag: int = 0
    counter1: int = 0
    counter2: int = 0
    seeds: List[AnchorSeed] = field(default_factory=list)
    score: int = 0
    cigar: Optional[bytearray] = None
    reference_cigar_range: range = range(0, 0)

    @classmethod
    def from_seed(cls, seed: Seed) -> "Anchor":
        return cls(
            reference=seed.rval,
            seed_count=1,
            mismatches=seed.mismatch,
            seeds=[AnchorSeed(qpos=seed.qpos, rpos=seed.rpos, length=seed.length)],
        )

    def gap_iter(self) -> Iterator[RangePair]:
        """Yield query and reference ranges pairing each seed with its predecessor."""
        for curr, nxt in zip(self.seeds[1:], self.seeds[:-1]):
            yield range(curr.qend(), nxt.qbegin()), range(curr.rend(), nxt.rbegin())

    def get_indel(self, other: "Anchor", read_length: int) -> int:
        """Difference in diagonal between the first seeds of two anchors."""
        seed_self = self.seeds[0]
        seed_other = other.seeds[0]
        if not self.orientation_set or not other.orientation_set:
            o1 = seed_self.offsets(read_length)
            o2 = seed_other.offsets(read_length)
            return min(o1[0] - o2[0], o1[1] - o2[1])
        return seed_self.offset() - seed_other.offset()

    def whole(self, read_length: int, ref_length: int) -> RangePair:
        """Ranges covering the read around the first seed, clipped to both sequences."""
        s = self.seeds[0]
        left = min(s.qbegin(), s.rbegin())
        right = min(
            _non_negative(read_length - s.qend(), "query overhang"),
            _non_negative(ref_length - s.rend(), "reference overhang"),
        )
        return (
            range(s.qbegin() - left, s.qend() + right),
            range(s.rbegin() - left, s.rend() + right),
        )

    def left_flank(self) -> RangePair:
        s = self.seeds[0]
        overhang = min(s.qbegin(), s.rbegin())
        return (
            range(s.qbegin() - overhang, s.qbegin()),
            range(s.rbegin() - overhang, s.rbegin()),
        )

    def right_flank(self, read_length: int, ref_length: int) -> RangePair:
        s = self.seeds[-1]
        overhang = min(
            _non_negative(read_length - s.qend(), "query overhang"),
            _non_negative(ref_length - s.rend(), "reference overhang"),
        )
        return (
            range(s.qend(), s.qend() + overhang),
            range(s.rend(), s.rend() + overhang),
        )

    def between(self, s1: AnchorSeed, s2: AnchorSeed) -> RangePair:
        return range(s1.qend(), s2.qbegin()), range(s1.rend(), s2.rbegin())

    def set_config(self, config: AnchorSeedConfig, read_length: int) -> None:
        if config is AnchorSeedConfig.QUERY_RC_SEED_RC:
            self.set_forward(False, read_length)
        elif config is AnchorSeedConfig.QUERY_SEED_RC:
            self.reverse_seeds(read_length)
            self.forward = True
        elif config is AnchorSeedConfig.QUERY_RC_SEED:
            self.forward = False
        elif config is AnchorSeedConfig.QUERY_SEED:
            self.forward = True

    def set_forward(self, forward: bool, read_length: int) -> "Anchor":
        """Fix the orientation of a single-seed anchor."""
        self.orientation_set = True
        self.forward = forward
        if len(self.seeds) != 1:
            raise ValueError("orientation can only be set on an anchor with one seed")
        if not forward:
            self.seeds[0].reverse(read_length)
        return self

    def reverse_seeds(self, read_length: int) -> "Anchor":
        for seed in self.seeds:
            seed.reverse(read_length)
        return self

    def reference_pos(self, read_length: int) -> Tuple[int, int]:
        """Reference interval the read would cover if placed on the first seed's diagonal."""
        seed = self.seeds[0]
        start = _non_negative(seed.rpos - seed.qpos, "reference start")
        return start, start + read_length

    def add_seed(self, seed: Seed, read_length: int) -> None:
        """Add a seed, assuming seeds arrive sorted by reference position."""
        self.seed_count += 1
        first = self.seeds[0]

        if first.qpos == seed.qpos and first.rpos == seed.rpos:
            if first.length > seed.length:
                self.mismatches = seed.mismatch
                first.length = seed.length
            if len(self.seeds) > 1:
                raise ValueError("Expected only one seed")
            return

        aseed = AnchorSeed(qpos=seed.qpos, rpos=seed.rpos, length=seed.length)

        if not self.orientation_set:
            if aseed.contains(first):
                print("Return1", file=sys.stderr)
                first.set(aseed)
                return
            self.forward = seed.qpos > first.qpos and seed.rpos > first.rpos
            print(
                f"Set direction ->> qpos {first.qpos} rpos {first.rpos} len {first.length}\n"
                f"{seed}\n--->  Forward? {str(self.forward).lower()}",
                file=sys.stderr,
            )
            self.orientation_set = True
            if not self.forward:
                first.reverse(read_length)

        if not self.forward:
            aseed.reverse(read_length)

        if aseed.qpos < first.qpos:
            print(f"Return {first}  {aseed}", file=sys.stderr)
            if self.orientation_set and self.seed_count == 1:
                if not self.forward:
                    first.reverse(read_length)
                self.orientation_set = False
            return

        if self.seeds[-1].rpos_sorted_merge_into(aseed) is SeedOverlap.NO_OVERLAP:
            self.seeds.append(aseed)

    def core_matches(self) -> int:
        return sum(seed.length for seed in self.seeds)

    def indels(self) -> int:
        return sum(
            abs((s2.qpos - s1.qpos) - (s2.rpos - s1.rpos))
            for s1, s2 in zip(self.seeds, self.seeds[1:])
        )

    def _orientation_mark(self, forward: str, reverse: str, unknown: str) -> str:
        if not self.orientation_set:
            return unknown
        return forward if self.forward else reverse

    def __str__(self) -> str:
        first = self.seeds[0]
        seed_char = self._orientation_mark(">", "<", "X")
        visual = "".join(
            " " * seed.qpos + seed_char * seed.length + "\n" for seed in self.seeds
        )
        listing = "".join(
            f" (qpos {seed.qpos} rpos {seed.rpos} len {seed.length})" for seed in self.seeds
        )
        return (
            f"{self._orientation_mark('>>>>>', '<<<<<', 'XXXXX')} --- Ref: {self.reference}, "
            f"qpos: {first.qpos}, rpos: {first.rpos}, seed_count {self.seed_count}, "
            f"mismatches: {self.mismatches}, core_matches: {self.core_matches()} "
            f"-- offset: {first.rpos - first.qpos}\n{visual}\n{listing}"
        )