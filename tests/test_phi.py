"""
Tests for phi confirmation and ranking
"""

import math

import pytest

from phicorr.phi import CorrelatedPair, confirm_candidates, phi_coefficient, rank_pairs
from phicorr.signatures import accumulate


class TestPhiCoefficient:
    def test_perfect_co_occurrence(self):
        assert phi_coefficient(3, 3, 3, 4) == pytest.approx(1.0)

    def test_partial_overlap_is_negative(self):
        # sp_A = sp_B = 0.75, sp_AB = 0.5
        assert phi_coefficient(3, 3, 2, 4) == pytest.approx(-1 / 3)

    def test_disjoint_occurrence(self):
        assert phi_coefficient(2, 2, 0, 4) == pytest.approx(-1.0)
        assert phi_coefficient(1, 1, 0, 10) <= 0

    def test_matches_pearson_on_indicator_vectors(self):
        a = [1, 1, 0, 1, 0, 0, 1, 0]
        b = [1, 0, 0, 1, 0, 1, 1, 0]
        n = len(a)
        mean_a, mean_b = sum(a) / n, sum(b) / n
        cov = sum((x - mean_a) * (y - mean_b) for x, y in zip(a, b)) / n
        sd_a = math.sqrt(sum((x - mean_a) ** 2 for x in a) / n)
        sd_b = math.sqrt(sum((y - mean_b) ** 2 for y in b) / n)
        both = sum(x & y for x, y in zip(a, b))
        assert phi_coefficient(sum(a), sum(b), both, n) == pytest.approx(cov / (sd_a * sd_b))

    @pytest.mark.parametrize("count_a,count_b,count_ab,n", [
        (4, 2, 2, 4),   # A in every transaction
        (0, 2, 0, 4),   # A in no transaction
        (2, 4, 2, 4),
        (0, 0, 0, 0),   # no transactions
    ])
    def test_undefined_cases(self, count_a, count_b, count_ab, n):
        assert phi_coefficient(count_a, count_b, count_ab, n) is None


class TestConfirmCandidates:
    def test_keeps_pairs_above_theta(self, small_transactions):
        table = accumulate(small_transactions, num_slots=2)
        confirmed = confirm_candidates({(1, 2), (1, 3)}, table, minsup=1, theta=0.3)
        assert [p.pair for p in confirmed] == [(1, 2)]
        assert confirmed[0].phi == pytest.approx(1.0)
        assert confirmed[0].support == 3

    def test_support_filter(self, small_transactions):
        table = accumulate(small_transactions, num_slots=2)
        assert confirm_candidates({(1, 2)}, table, minsup=4, theta=0.3) == []

    def test_degenerate_pair_excluded(self):
        # Item 0 is in every transaction, so phi is undefined
        table = accumulate([[0, 1], [0, 1], [0, 2]], num_slots=2)
        assert confirm_candidates({(0, 1)}, table, minsup=1, theta=0.1) == []

    def test_never_emits_nan(self):
        table = accumulate([[0, 1], [0, 1], [0, 1]], num_slots=2)
        confirmed = confirm_candidates({(0, 1)}, table, minsup=1, theta=0.0)
        assert all(not math.isnan(p.phi) for p in confirmed)
        assert confirmed == []

    def test_reversed_candidate_is_canonicalized(self, small_transactions):
        table = accumulate(small_transactions, num_slots=2)
        confirmed = confirm_candidates({(2, 1)}, table, minsup=1, theta=0.3)
        assert confirmed[0].pair == (1, 2)


class TestRanking:
    def test_sorted_by_phi_descending(self):
        pairs = [CorrelatedPair(0, 1, 0.9), CorrelatedPair(2, 3, 0.5), CorrelatedPair(4, 5, 0.91)]
        assert [p.phi for p in rank_pairs(pairs)] == [0.91, 0.9, 0.5]

    def test_ties_broken_by_ids(self):
        pairs = [CorrelatedPair(3, 4, 0.7), CorrelatedPair(1, 9, 0.7), CorrelatedPair(1, 2, 0.7)]
        assert [p.pair for p in rank_pairs(pairs)] == [(1, 2), (1, 9), (3, 4)]

    def test_pair_must_be_canonical(self):
        with pytest.raises(ValueError):
            CorrelatedPair(2, 1, 0.5)
        with pytest.raises(ValueError):
            CorrelatedPair(1, 1, 0.5)
