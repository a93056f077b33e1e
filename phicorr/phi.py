"""
Phi Confirmation - exact correlation check of LSH candidates

Set membership is binary, so the Pearson correlation of two items'
transaction indicator vectors reduces to the phi coefficient:

    phi = (sp_AB - sp_A * sp_B) / sqrt(sp_A * sp_B * (1 - sp_A) * (1 - sp_B))

where sp_X is the fraction of the N transactions containing X.

Degenerate items (present in no transaction or in every transaction)
have a zero denominator. Their phi is undefined and such pairs are
dropped, never reported as NaN.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import math

from .signatures import SignatureTable


@dataclass(frozen=True)
class CorrelatedPair:
    """A candidate pair that passed support and threshold checks."""
    i1: int
    i2: int
    phi: float
    support: int = 0

    def __post_init__(self):
        if self.i1 >= self.i2:
            raise ValueError(f"Pair must be canonical (i1 < i2), got ({self.i1}, {self.i2})")

    @property
    def pair(self) -> Tuple[int, int]:
        return (self.i1, self.i2)


def phi_coefficient(count_a: int, count_b: int, count_ab: int,
                    n_transactions: int) -> Optional[float]:
    """
    Phi correlation from raw counts.

    Args:
        count_a: Transactions containing A
        count_b: Transactions containing B
        count_ab: Transactions containing both
        n_transactions: Total transactions N

    Returns:
        phi in [-1, 1], or None when undefined (N == 0, or A or B
        occurs in none or all of the transactions)
    """
    if n_transactions <= 0:
        return None
    n = float(n_transactions)
    sp_a = count_a / n
    sp_b = count_b / n
    sp_ab = count_ab / n

    variance = sp_a * sp_b * (1.0 - sp_a) * (1.0 - sp_b)
    if variance <= 0.0:
        return None
    return (sp_ab - sp_a * sp_b) / math.sqrt(variance)


def confirm_candidates(candidates: Iterable[Tuple[int, int]], table: SignatureTable,
                       minsup: int, theta: float) -> List[CorrelatedPair]:
    """
    Keep the candidates whose exact phi exceeds theta.

    Pairs co-occurring in fewer than minsup transactions are discarded
    first: too little evidence, not necessarily uncorrelated.

    Returns:
        Confirmed pairs in no particular order (see rank_pairs)
    """
    confirmed: List[CorrelatedPair] = []
    for i1, i2 in candidates:
        support = table.pair_count(i1, i2)
        if support < minsup:
            continue
        phi = phi_coefficient(table.occurrence(i1), table.occurrence(i2),
                              support, table.n_transactions)
        if phi is not None and phi > theta:
            confirmed.append(CorrelatedPair(min(i1, i2), max(i1, i2), phi, support))
    return confirmed


def rank_pairs(pairs: Iterable[CorrelatedPair]) -> List[CorrelatedPair]:
    """Sort by phi descending; ties by (i1, i2) so the order is deterministic."""
    return sorted(pairs, key=lambda p: (-p.phi, p.i1, p.i2))


__all__ = [
    'CorrelatedPair',
    'phi_coefficient',
    'confirm_candidates',
    'rank_pairs',
]
