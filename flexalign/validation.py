"""Checks and extensions of anchors against the read and the reference."""

from __future__ import annotations

import contextlib
import copy
import sys
from typing import Optional, Union

from .anchor import Anchor, AnchorSeedConfig
from .seeds import AnchorSeed, hamming

SequenceLike = Union[bytes, bytearray, memoryview, str]

_RED = "\x1b[31m"
_GREEN = "\x1b[32m"
_RESET = "\x1b[0m"


def _seq(data: SequenceLike) -> bytes:
    if isinstance(data, str):
        return data.encode("ascii")
    return bytes(data)


def _cut(seq: bytes, span: range) -> bytes:
    """Slice like a bounds-checked range index: out-of-range spans raise."""
    if span.start < 0 or span.start > span.stop or span.stop > len(seq):
        raise IndexError(
            f"range {span.start}..{span.stop} out of bounds for length {len(seq)}"
        )
    return seq[span.start:span.stop]


def _text(seq: bytes) -> str:
    return seq.decode("utf-8", errors="replace")


def _red(seq: bytes) -> str:
    return f"{_RED}{_text(seq)}{_RESET}"


def _green(seq: bytes) -> str:
    return f"{_GREEN}{_text(seq)}{_RESET}"


def _first_mismatch(a: bytes, b: bytes) -> Optional[int]:
    return next((i for i, (x, y) in enumerate(zip(a, b)) if x != y), None)


def _last_mismatch(a: bytes, b: bytes) -> Optional[int]:
    """Distance from the end of the shorter sequence to its last mismatch."""
    n = min(len(a), len(b))
    return _first_mismatch(a[:n][::-1], b[:n][::-1])


def _exact(seed: AnchorSeed, query: bytes, reference: bytes) -> bool:
    return hamming(_cut(query, seed.qrange()), _cut(reference, seed.rrange())) == 0


def anchor_hamming(anchor: Anchor, query: SequenceLike, reference: SequenceLike) -> int:
    """Hamming distance of the read placed on the first seed's diagonal."""
    query, reference = _seq(query), _seq(reference)
    qr, rr = anchor.whole(len(query), len(reference))
    return hamming(_cut(query, qr), _cut(reference, rr))


def extend_seeds(anchor: Anchor, query: SequenceLike, reference: SequenceLike) -> None:
    """Grow the anchor's seeds over exact matches and merge seeds that meet."""
    if not anchor.orientation_set:
        return
    query, reference = _seq(query), _seq(reference)

    left_q_range, left_r_range = anchor.left_flank()
    if left_q_range.stop > len(query):
        print(anchor, file=sys.stderr)
        with contextlib.suppress(IndexError):
            visualize_alignment(anchor, query, reference)
            valid = validate_seeds(anchor, query, reference)
            print(f"Seeds valid? {str(valid).lower()}", file=sys.stderr)
        raise ValueError(
            f"Issues here {left_q_range.start}..{left_q_range.stop} {len(query)}"
        )

    left_q = _cut(query, left_q_range)
    left_r = _cut(reference, left_r_range)
    by = _last_mismatch(left_q, left_r)
    anchor.seeds[0].extend_left(len(left_q) if by is None else by)

    current = 0
    while current + 1 < len(anchor.seeds):
        this_seed, next_seed = anchor.seeds[current], anchor.seeds[current + 1]
        mq_range, mr_range = anchor.between(this_seed, next_seed)
        middle_q = _cut(query, mq_range)
        middle_r = _cut(reference, mr_range)

        by = _last_mismatch(middle_q, middle_r)
        if by is None:
            this_seed.extend_right(len(middle_q) + next_seed.length)
            del anchor.seeds[current + 1]
            continue
        next_seed.extend_left(by)

        forward_by = _first_mismatch(middle_q, middle_r)
        if forward_by is None:
            raise AssertionError("a mismatch found backwards must be found forwards")
        this_seed.extend_right(forward_by)
        current += 1

    right_q_range, right_r_range = anchor.right_flank(len(query), len(reference))
    right_q = _cut(query, right_q_range)
    right_r = _cut(reference, right_r_range)
    by = _first_mismatch(right_q, right_r)
    anchor.seeds[-1].extend_right(len(right_q) if by is None else by)


def all_seeds_valid(anchor: Anchor, query: SequenceLike, reference: SequenceLike) -> bool:
    """True if every seed matches the reference exactly."""
    query, reference = _seq(query), _seq(reference)
    return all(_exact(seed, query, reference) for seed in anchor.seeds)


def validate_seeds(anchor: Anchor, query: SequenceLike, reference: SequenceLike) -> bool:
    """True if every seed matches the reference exactly."""
    return all_seeds_valid(anchor, query, reference)


def are_all_seeds_valid(anchor: Anchor, query: SequenceLike, reference: SequenceLike) -> bool:
    """True if every seed matches the reference exactly."""
    return all_seeds_valid(anchor, query, reference)


def valid_seed_count(anchor: Anchor, query: SequenceLike, reference: SequenceLike) -> int:
    """Number of seeds that match the reference exactly."""
    query, reference = _seq(query), _seq(reference)
    return sum(_exact(seed, query, reference) for seed in anchor.seeds)


def are_all_seeds_valid_any_config(
    anchor: Anchor, query: SequenceLike, query_rc: SequenceLike, reference: SequenceLike
) -> bool:
    """True if each seed matches either on the read or, reversed, on its complement."""
    query, query_rc, reference = _seq(query), _seq(query_rc), _seq(reference)
    for fwd in anchor.seeds:
        rev = copy.copy(fwd)
        rev.reverse(len(query))
        reference_seed = _cut(reference, fwd.rrange())
        if not (
            hamming(_cut(query, fwd.qrange()), reference_seed) == 0
            or hamming(_cut(query_rc, rev.qrange()), reference_seed) == 0
        ):
            return False
    return True


def any_orientation_valid(
    anchor: Anchor, query: SequenceLike, query_rc: SequenceLike, reference: SequenceLike
) -> bool:
    """Try both strands, then flip the first seed and try again.

    The flip of the first seed is kept even when no orientation fits.
    """
    query, query_rc, reference = _seq(query), _seq(query_rc), _seq(reference)
    if validate_seeds(anchor, query, reference) or validate_seeds(anchor, query_rc, reference):
        return True
    anchor.seeds[0].reverse(len(query))
    return validate_seeds(anchor, query, reference) or validate_seeds(
        anchor, query_rc, reference
    )


def visualize_alignment(anchor: Anchor, query: SequenceLike, reference: SequenceLike) -> bool:
    """Write the read and the reference, seeds in green and gaps in red, to stderr."""
    query, reference = _seq(query), _seq(reference)
    first = anchor.seeds[0]
    print(f"Q {len(query)} {_text(query)}", file=sys.stderr)
    print(repr(first), file=sys.stderr)

    parts = ["Alignment Visualization:\n"]
    old = first
    parts.append(_red(_cut(query, range(0, old.qbegin()))))
    parts.append(_green(_cut(query, old.qrange())))
    for seed in anchor.seeds[1:]:
        parts.append(_red(_cut(query, range(old.qend(), seed.qbegin()))))
        parts.append(_green(_cut(query, seed.qrange())))
        old = seed
    qspace = _cut(query, range(old.qend(), len(query)))
    parts.append(_red(qspace) + "\n")

    old = first
    if old.rbegin() < old.qbegin():
        rstart = 0
        parts.append(" " * (old.qbegin() - old.rbegin()))
    else:
        rstart = old.rbegin() - old.qbegin()
    parts.append(_red(_cut(reference, range(rstart, old.rbegin()))))
    parts.append(_green(_cut(reference, old.rrange())))
    for seed in anchor.seeds[1:]:
        parts.append(_red(_cut(reference, range(old.rend(), seed.rbegin()))))
        parts.append(_green(_cut(reference, seed.rrange())))
        old = seed
    tail_end = min(old.rend() + len(qspace), len(reference))
    parts.append(_red(_cut(reference, range(old.rend(), tail_end))) + "\n")

    sys.stderr.write("".join(parts))
    return True


def get_seed_config(
    seed: AnchorSeed, query: SequenceLike, query_rc: SequenceLike, reference: SequenceLike
) -> AnchorSeedConfig:
    """Find which strand and seed placement make the seed match the reference."""
    query, query_rc, reference = _seq(query), _seq(query_rc), _seq(reference)
    seed_rc = copy.copy(seed)
    seed_rc.reverse(len(query))
    reference_seed = _cut(reference, seed.rrange())

    candidates = (
        (_cut(query_rc, seed_rc.qrange()), AnchorSeedConfig.QUERY_RC_SEED_RC),
        (_cut(query, seed.qrange()), AnchorSeedConfig.QUERY_SEED),
        (_cut(query, seed_rc.qrange()), AnchorSeedConfig.QUERY_SEED_RC),
        (_cut(query_rc, seed.qrange()), AnchorSeedConfig.QUERY_RC_SEED),
    )
    for query_seed, config in candidates:
        if hamming(query_seed, reference_seed) == 0:
            return config
    for query_seed, _ in candidates:
        print(hamming(query_seed, reference_seed), file=sys.stderr)
    return AnchorSeedConfig.NONE


def seed_match(seed: AnchorSeed, query: SequenceLike, reference: SequenceLike) -> bool:
    """True if the seed matches the reference exactly."""
    return _exact(seed, _seq(query), _seq(reference))