# flexalign

Building blocks for mapping short sequencing reads against reference
sequences. The package has seeds, anchors built from seeds, checks of seeds
against the read and the reference, paired-end anchor scoring, and
MAPQ-based evaluation of mapping accuracy.

Sequences are handled as `bytes`. The functions in `flexalign.validation`
also accept `bytearray`, `memoryview` and ASCII `str`. Nothing outside the
standard library is needed.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `flexalign.seeds` has `Seed`, `AnchorSeed`, `SeedOverlap` and `hamming`.
  - A `Seed` is an exact or near-exact hit between a read position and a
    reference position. It can be built with `Seed.from_flexmer` or
    `Seed.from_coremer`.
  - It gives its diagonal offsets for the forward and the
    reverse-complemented read (`offsets`, `offset_dist`, `closest_offset`).
  - An `AnchorSeed` is an exact match block inside an anchor. It can be
    extended (`extend_left`, `extend_right`), merged (`merge_into`,
    `rpos_sorted_merge_into`) and reversed onto the other strand.
- `flexalign.anchor` has `Anchor` and `AnchorSeedConfig`.
  - An `Anchor` is a chain of seeds of one read on one reference. It carries
    a strand orientation (`set_forward`, `set_config`, `reverse_seeds`).
  - `add_seed` adds a seed and assumes that seeds arrive sorted by reference
    position.
  - It gives the query and reference ranges of its left flank, its right
    flank, the gap between two seeds (`between`, `gap_iter`) and the whole
    read span (`whole`).
  - It also gives `core_matches`, `indels` and `get_indel`.
- `flexalign.validation` checks seeds against the read and the reference.
  - `validate_seeds`, `all_seeds_valid`, `are_all_seeds_valid`,
    `valid_seed_count` and `seed_match` check that seeds match exactly.
  - `are_all_seeds_valid_any_config`, `any_orientation_valid` and
    `get_seed_config` find the strand on which the seeds match.
  - `anchor_hamming` gives the Hamming distance of the read placed on the
    diagonal of the first seed.
  - `extend_seeds` grows the seeds of an oriented anchor over matching bases
    and merges seeds that meet.
  - `visualize_alignment` writes the read and the reference to stderr, with
    seeds in green and gaps in red.
- `flexalign.pairs` handles paired-end reads.
  - `AnchorPair` holds the anchors of both mates, either of which may be
    `None`. `resolve_orientation` gives a mate without orientation the
    opposite orientation of its partner.
  - `Or` holds one of two alternatives.
  - `anchor_score` and `paired_anchor_score` score anchors.
    `paired_anchor_mapq` gives the score gap between the best pair and the
    second pair as a byte.
  - `format_anchor_pairs` lists anchor pairs for diagnostics.
- `flexalign.evaluation` has `MapqEvaluation` and `BinaryEvaluator`.
  - `MapqEvaluation` counts correct and incorrect mappings for each MAPQ
    value. Its `str()` is a tab-separated table for the first ten MAPQ
    thresholds.
  - `BinaryEvaluator` turns the counts into sensitivity, precision, F1,
    specificity and the other rates. A rate with a zero denominator is NaN
    or infinity.

## Example

```python
from flexalign.seeds import Seed
from flexalign.anchor import Anchor
from flexalign.validation import validate_seeds, extend_seeds

reference = b"ACGTACGTTTGACCAGTACGATCGA"
read = reference[4:20]

seed = Seed(rpos=8, rval=0, qpos=4, mismatch=0, length=6)
anchor = Anchor.from_seed(seed)
anchor.set_forward(True, len(read))

print(validate_seeds(anchor, read, reference))      # True
print(anchor.left_flank())                          # (range(0, 4), range(4, 8))
print(anchor.whole(len(read), len(reference)))      # (range(0, 16), range(4, 20))

extend_seeds(anchor, read, reference)
print(anchor.seeds[0])                              # qpos: 0, rpos: 4, length: 16
```

Evaluating mappings:

```python
from flexalign.evaluation import MapqEvaluation

evaluation = MapqEvaluation()
evaluation.add(True, 30)
evaluation.add(False, 2)
print(evaluation.binary_evaluator(3).precision())   # 1.0
print(evaluation)
```

## What it does not do

The package does not align sequences base by base. It has no pairwise
aligner and no CIGAR strings. It reads no FASTQ or FASTA files, builds no
reference index and writes no PAF or SAM output. It has no command-line
program. Seeds have to be made by the caller, and so do the reverse
complements of reads.