"""Confusion-matrix statistics and MAPQ-stratified evaluation of read mappings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List


def _ratio(numerator: int, denominator: int) -> float:
    """Divide like IEEE floats do: 0/0 is NaN and x/0 is infinity."""
    if denominator == 0:
        return math.nan if numerator == 0 else math.inf
    return numerator / denominator


def _fmt(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.4f}"


@dataclass
class BinaryEvaluator:
    """Counts of true/false positives and negatives."""

    tps: int = 0
    fps: int = 0
    tns: int = 0
    fns: int = 0

    def actual_positives(self) -> int:
        return self.tps + self.fns

    def actual_negatives(self) -> int:
        return self.fps + self.tns

    def predicted_positives(self) -> int:
        return self.tps + self.fps

    def predicted_negatives(self) -> int:
        return self.tns + self.fns

    def total(self) -> int:
        return self.tps + self.tns + self.fps + self.fns

    def sensitivity(self) -> float:
        return _ratio(self.tps, self.actual_positives())

    def recall(self) -> float:
        return self.sensitivity()

    def true_positive_rate(self) -> float:
        return self.sensitivity()

    def false_positive_rate(self) -> float:
        return _ratio(self.fps, self.actual_negatives())

    def true_negative_rate(self) -> float:
        return _ratio(self.tns, self.actual_negatives())

    def false_negative_rate(self) -> float:
        return _ratio(self.fns, self.actual_negatives())

    def negative_predictive_value(self) -> float:
        return _ratio(self.tns, self.predicted_negatives())

    def specificity(self) -> float:
        return self.true_negative_rate()

    def precision(self) -> float:
        return _ratio(self.tps, self.predicted_positives())

    def positive_predictive_value(self) -> float:
        return self.precision()

    def f1_score(self) -> float:
        return _ratio(2 * self.tps, 2 * self.tps + self.fps + self.fns)

    def accuracy(self) -> float:
        return _ratio(self.tps + self.fns, self.total())


_HEADER = "MAPQ\tTP\tFP\tFN\tTN\tSensitivity\tPrecision\tF1\tSpecificity\tAccuracy\n"
_MAX_DISPLAY = 10


@dataclass
class MapqEvaluation:
    """Histograms of correct and incorrect mappings indexed by MAPQ."""

    mapq_correct: List[int] = field(default_factory=list)
    mapq_incorrect: List[int] = field(default_factory=list)

    def binary_evaluator(self, mapq_threshold: int) -> BinaryEvaluator:
        """Treat mappings with MAPQ at or above the threshold as positives."""
        return BinaryEvaluator(
            tps=sum(self.mapq_correct[mapq_threshold:]),
            fps=sum(self.mapq_incorrect[mapq_threshold:]),
            tns=sum(self.mapq_incorrect[:mapq_threshold]),
            fns=sum(self.mapq_correct[:mapq_threshold]),
        )

    def add(self, correct: bool, mapq: int) -> None:
        """Record one mapping with its MAPQ."""
        if mapq < 0:
            raise ValueError(f"mapq must not be negative: {mapq}")
        histogram = self.mapq_correct if correct else self.mapq_incorrect
        if mapq >= len(histogram):
            histogram.extend([0] * (mapq + 1 - len(histogram)))
        histogram[mapq] += 1

    def merge_from(self, other: "MapqEvaluation") -> None:
        """Add the counts of another evaluation into this one."""
        for mine, theirs in (
            (self.mapq_correct, other.mapq_correct),
            (self.mapq_incorrect, other.mapq_incorrect),
        ):
            if len(mine) < len(theirs):
                mine.extend([0] * (len(theirs) - len(mine)))
            for i, count in enumerate(theirs):
                mine[i] += count

    def __str__(self) -> str:
        rows = [_HEADER]
        limit = min(max(len(self.mapq_correct), len(self.mapq_incorrect)), _MAX_DISPLAY)
        for threshold in range(limit):
            ev = self.binary_evaluator(threshold)
            values = "\t".join(
                _fmt(v)
                for v in (
                    ev.sensitivity(),
                    ev.precision(),
                    ev.f1_score(),
                    ev.specificity(),
                    ev.accuracy(),
                    ev.true_negative_rate(),
                    ev.negative_predictive_value(),
                )
            )
            rows.append(f"{threshold}\t{ev.tps}\t{ev.fps}\t{ev.fns}\t{ev.tns}\t{values}\n")
        return "".join(rows)