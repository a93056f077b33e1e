"""Ranking and rendering of confirmed pairs with their original labels."""

from __future__ import annotations
from typing import Iterable, List, Tuple

from .constants import DEFAULT_TOP_N
from .ingest import LabelIndex
from .phi import CorrelatedPair, rank_pairs


def top_pairs(pairs: Iterable[CorrelatedPair], n: int = DEFAULT_TOP_N) -> List[CorrelatedPair]:
    """The n highest-phi pairs, best first."""
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return rank_pairs(pairs)[:n]


def labeled_pairs(pairs: Iterable[CorrelatedPair],
                  labels: LabelIndex) -> List[Tuple[str, str, float]]:
    """Resolve ids back to labels as (label_a, label_b, phi) triples."""
    return [(labels.label_of(p.i1), labels.label_of(p.i2), p.phi) for p in pairs]


def format_pair(label_a: str, label_b: str, phi: float) -> str:
    return f"{label_a:>20} {label_b:>20} : {phi:.3f}"


def format_report(pairs: Iterable[CorrelatedPair], labels: LabelIndex,
                  n: int = DEFAULT_TOP_N) -> str:
    """Top n pairs, one `label_a label_b : phi` line each."""
    lines = [format_pair(a, b, phi) for a, b, phi in labeled_pairs(top_pairs(pairs, n), labels)]
    return "\n".join(lines)


__all__ = [
    'top_pairs',
    'labeled_pairs',
    'format_pair',
    'format_report',
]
