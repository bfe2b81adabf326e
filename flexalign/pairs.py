"""Paired-end anchors, their scores and a pseudo mapping quality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, Optional, Sequence, TypeVar

from .anchor import Anchor

A = TypeVar("A")
B = TypeVar("B")


@dataclass
class AnchorPair:
    """Anchors of the two mates of a read pair; either may be missing."""

    first: Optional[Anchor] = None
    second: Optional[Anchor] = None

    def __iter__(self) -> Iterator[Optional[Anchor]]:
        yield self.first
        yield self.second

    def resolve_orientation(self, read_length_fwd: int, read_length_rev: int) -> None:
        """Give a mate without orientation the opposite of its partner's."""
        first, second = self.first, self.second
        if (
            first is not None
            and not first.orientation_set
            and second is not None
            and second.orientation_set
        ):
            first.set_forward(not second.forward, read_length_fwd)
        if (
            second is not None
            and not second.orientation_set
            and first is not None
            and first.orientation_set
        ):
            second.set_forward(not first.forward, read_length_rev)

    def reference(self) -> int:
        """Reference id of the pair, taken from the first mate present."""
        if self.first is not None:
            return self.first.reference
        if self.second is not None:
            return self.second.reference
        raise ValueError("anchor pair holds no anchor")


@dataclass
class Or(Generic[A, B]):
    """Holds one of two alternatives."""

    a: Optional[A] = None
    b: Optional[B] = None

    @classmethod
    def new_a(cls, a: A) -> "Or[A, B]":
        return cls(a=a)

    @classmethod
    def new_b(cls, b: B) -> "Or[A, B]":
        return cls(b=b)

    def has_a(self) -> bool:
        return self.a is not None

    def has_b(self) -> bool:
        return self.b is not None


def anchor_score(anchor: Anchor) -> int:
    """Seed bases minus mismatches."""
    return anchor.core_matches() - anchor.mismatches


def paired_anchor_score(pair: AnchorPair) -> int:
    """Sum of the scores of the mates present."""
    return sum(anchor_score(a) for a in pair if a is not None)


def paired_anchor_mapq(anchors: Sequence[AnchorPair]) -> int:
    """Score gap between the best and second pair, as an unsigned byte.

    The pairs must be sorted from best to worst.
    """
    if not anchors:
        raise ValueError("no anchor pairs to score")
    if len(anchors) <= 1:
        return 0
    diff = paired_anchor_score(anchors[0]) - paired_anchor_score(anchors[1])
    return diff & 0xFF


def format_anchor_pairs(pairs: Sequence[AnchorPair]) -> str:
    """A listing of anchor pairs for diagnostics."""
    lines = ["Anchor pair print -----"]
    for first, second in pairs:
        lines.append("\t---")
        lines.append(f"\t\t{first!r}")
        lines.append(f"\t\t{second!r}")
    lines.append("----- Anchor print")
    return "\n".join(lines) + "\n"