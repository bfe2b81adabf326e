import pytest

from flexalign.seeds import AnchorSeed, Seed, SeedOverlap, hamming


def make_seed():
    return Seed(rpos=100, rval=7, qpos=5, mismatch=0, length=31)


def test_hamming_identical_is_zero():
    assert hamming(b"ACGTACGT", b"ACGTACGT") == 0


def test_hamming_all_different_counts_every_position():
    q = b"ACGT"
    assert hamming(q, b"TGCA") == len(q)


def test_hamming_symmetric_and_uses_shorter():
    assert hamming(b"ACGA", b"AGGT") == hamming(b"AGGT", b"ACGA")
    assert hamming(b"ACGTTT", b"ACG") == 0


def test_from_flexmer_exact_keeps_full_kmer():
    s = Seed.from_flexmer(10, 200, 3, 0, 31, 15, 16)
    assert (s.qpos, s.rpos, s.rval, s.length, s.mismatch, s.flag) == (10, 200, 3, 31, 0, 0)


def test_from_flexmer_inexact_keeps_core():
    exact = Seed.from_coremer(10, 200, 3, 15, 16)
    s = Seed.from_flexmer(10, 200, 3, 2, 31, 15, 16)
    assert (s.qpos, s.rpos, s.length) == (exact.qpos, exact.rpos, exact.length)
    assert s.mismatch == 2


def test_from_coremer_is_exact_core():
    s = Seed.from_coremer(0, 0, 1, 15, 16)
    assert s.mismatch == 0
    assert s.length == 15
    assert s.qpos - 0 == s.rpos - 0


def test_offset_matches_first_offset():
    s = make_seed()
    assert s.offset() == s.offsets(150)[0]


def test_reverse_swaps_offsets():
    s = make_seed()
    r = s.reverse(150)
    assert r.offsets(150) == tuple(reversed(s.offsets(150)))


def test_reverse_twice_is_identity():
    s = make_seed()
    assert s.reverse(150).reverse(150) == s


def test_reverse_too_short_read_raises():
    with pytest.raises(ValueError):
        make_seed().reverse(10)


def test_offset_dist_to_self_is_zero():
    s = make_seed()
    assert s.offset_dist(s, 150) == 0


def test_offset_dist_to_reversed_is_zero():
    s = make_seed()
    assert s.offset_dist(s.reverse(150), 150) == 0


def test_closest_offset_ties_choose_reverse():
    s = make_seed()
    assert s.closest_offset(s, 150) == (s.offsets(150)[1], False, 0)


def test_closest_offset_prefers_forward_when_closer():
    s = make_seed()
    other = Seed(rpos=s.rpos + 20, rval=7, qpos=s.qpos + 20, mismatch=0, length=31)
    off, forward, dist = s.closest_offset(other, 150)
    assert forward
    assert off == s.offset()
    assert dist == 0


def test_visual_string_x_without_length():
    s = make_seed()
    text = s.to_visual_string_x(None)
    assert text.lstrip(" ") == "X" * s.length
    assert len(text) == s.qpos + s.length


def test_visual_string_x_with_length_ends_with_description():
    s = make_seed()
    text = s.to_visual_string_x(150)
    assert text.endswith(str(s))
    assert text.count("X") == s.length


def test_visual_string_shows_read_slice():
    read = b"TTTTTACGTACGTACGTACGTACGTACGTACGTACGAAAA"
    s = make_seed()
    text = s.to_visual_string(read)
    assert text.lstrip(" ") == read[s.qpos:s.qpos + s.length].decode()


def test_seed_str_format():
    s = make_seed()
    text = str(s)
    assert text.startswith("reference: 7  rpos: 100,  qpos: 5, mismatch: 0, length: 31")
    assert text.endswith(f"offsets: {s.offsets(150)}")


def test_anchor_seed_bounds():
    a = AnchorSeed(qpos=10, rpos=100, length=20)
    assert a.qend() - a.qbegin() == a.length
    assert a.rend() - a.rbegin() == a.length
    assert len(a.qrange()) == len(a.rrange()) == a.length
    assert a.qrange()[0] == a.qbegin()


def test_extend_left_and_right():
    a = AnchorSeed(qpos=10, rpos=100, length=20)
    end = a.qend()
    a.extend_left(4)
    assert a.qend() == end
    assert a.qbegin() == 10 - 4
    a.extend_right(3)
    assert a.qend() == end + 3


def test_extend_left_past_start_raises():
    with pytest.raises(ValueError):
        AnchorSeed(qpos=2, rpos=100, length=5).extend_left(3)


def test_set_copies():
    a = AnchorSeed(1, 2, 3)
    b = AnchorSeed(10, 20, 30)
    a.set(b)
    assert a == b


def test_merge_into_overlap_extends():
    a = AnchorSeed(10, 100, 10)
    other = AnchorSeed(15, 105, 10)
    assert a.merge_into(other)
    assert a.qbegin() == 10
    assert a.qend() == other.qend()


def test_merge_into_contained_unchanged():
    a = AnchorSeed(10, 100, 10)
    assert a.merge_into(AnchorSeed(12, 102, 3))
    assert a == AnchorSeed(10, 100, 10)


def test_merge_into_left_overlap_moves_start():
    a = AnchorSeed(10, 110, 10)
    other = AnchorSeed(5, 105, 10)
    assert a.merge_into(other)
    assert (a.qpos, a.rpos) == (other.qpos, other.rpos)


def test_merge_into_disjoint():
    a = AnchorSeed(10, 100, 10)
    assert not a.merge_into(AnchorSeed(30, 120, 5))
    assert a == AnchorSeed(10, 100, 10)


def test_contains():
    outer = AnchorSeed(10, 100, 10)
    inner = AnchorSeed(12, 102, 3)
    assert outer.contains(inner)
    assert not inner.contains(outer)


def test_rpos_sorted_merge_contained_other():
    a = AnchorSeed(10, 100, 10)
    assert a.rpos_sorted_merge_into(AnchorSeed(12, 102, 3)) is SeedOverlap.CONTAINED_OTHER
    assert a == AnchorSeed(10, 100, 10)


def test_rpos_sorted_merge_offset_forward():
    a = AnchorSeed(10, 100, 10)
    other = AnchorSeed(15, 105, 10)
    assert a.rpos_sorted_merge_into(other) is SeedOverlap.OFFSET_FWD_OTHER
    assert a.qend() == other.qend()


def test_rpos_sorted_merge_contained_self():
    a = AnchorSeed(10, 100, 5)
    other = AnchorSeed(8, 98, 10)
    assert a.rpos_sorted_merge_into(other) is SeedOverlap.CONTAINED_SELF
    assert (a.qpos, a.length) == (other.qpos, other.length)


def test_rpos_sorted_merge_no_overlap():
    a = AnchorSeed(10, 100, 5)
    assert a.rpos_sorted_merge_into(AnchorSeed(30, 120, 5)) is SeedOverlap.NO_OVERLAP
    assert a == AnchorSeed(10, 100, 5)


def test_rpos_sorted_merge_rejects_earlier_shorter_seed():
    with pytest.raises(ValueError):
        AnchorSeed(10, 100, 10).rpos_sorted_merge_into(AnchorSeed(5, 95, 3))


def test_anchor_seed_reverse_twice_is_identity():
    a = AnchorSeed(10, 100, 20)
    a.reverse(150)
    assert a.qend() <= 150
    a.reverse(150)
    assert a == AnchorSeed(10, 100, 20)


def test_anchor_seed_reverse_too_short_raises():
    with pytest.raises(ValueError):
        AnchorSeed(10, 100, 20).reverse(15)


def test_anchor_seed_offset_signs():
    a = AnchorSeed(10, 100, 20)
    assert a.offset() == -a.offsets(150)[0]
    b = AnchorSeed(10, 100, 20)
    b.reverse(150)
    assert b.offsets(150) == tuple(reversed(a.offsets(150)))


def test_anchor_seed_str():
    assert str(AnchorSeed(3, 44, 12)) == "qpos: 3, rpos: 44, length: 12"