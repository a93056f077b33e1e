"""
End-to-end tests for the correlated pair miner
"""

import itertools

import pytest

from phicorr.config import MinerConfig
from phicorr.miner import CorrelatedPairMiner, find_correlated_pairs, split_batches
from phicorr.phi import phi_coefficient
from phicorr.synthetic import generate_transactions


def exact_pairs(table, minsup, theta):
    """Brute-force reference over every co-occurring pair."""
    found = set()
    for (i1, i2), support in table.pair_counts.items():
        if support < minsup:
            continue
        phi = phi_coefficient(table.occurrence(i1), table.occurrence(i2), support,
                              table.n_transactions)
        if phi is not None and phi > theta:
            found.add((i1, i2))
    return found


class TestSmallExamples:
    def test_identical_items_reported(self, small_transactions, loose_config):
        pairs = CorrelatedPairMiner(loose_config).find_correlated_pairs(small_transactions)
        assert pairs[0].pair == (1, 2)
        assert pairs[0].phi == pytest.approx(1.0)
        for p in pairs:
            assert p.phi > loose_config.theta
            assert p.pair in {(1, 2), (1, 4), (2, 4)}

    def test_negative_correlation_not_reported(self, loose_config):
        # Items 1 and 2: sp_A = sp_B = 0.75, sp_AB = 0.5, phi = -1/3
        transactions = [[1, 2, 3], [1, 2], [1, 4], [2, 3]]
        pairs = CorrelatedPairMiner(loose_config).find_correlated_pairs(transactions)
        assert (1, 2) not in {p.pair for p in pairs}

    def test_disjoint_items_not_reported(self, loose_config):
        transactions = [[0, 2], [1, 3], [0, 2], [1, 3]]
        pairs = find_correlated_pairs(transactions, loose_config)
        assert {p.pair for p in pairs} == {(0, 2), (1, 3)}

    def test_support_filter(self):
        transactions = [[0, 1], [0, 1], [2], [3]]
        config = MinerConfig(minsup=3)
        assert find_correlated_pairs(transactions, config) == []

    def test_empty_input(self):
        assert CorrelatedPairMiner().find_correlated_pairs([]) == []

    def test_output_is_canonical_and_unique(self, loose_config):
        transactions = [[0, 1, 2], [2, 1, 0], [0, 1], [3, 4], [4, 3], [5]]
        pairs = find_correlated_pairs(transactions, loose_config)
        keys = [p.pair for p in pairs]
        assert len(keys) == len(set(keys))
        assert all(i1 < i2 for i1, i2 in keys)

    def test_last_table_kept(self, small_transactions, loose_config):
        miner = CorrelatedPairMiner(loose_config)
        miner.find_correlated_pairs(small_transactions)
        assert miner.last_table.n_transactions == 4
        assert miner.last_table.num_slots == loose_config.num_slots

    def test_invalid_workers(self):
        with pytest.raises(ValueError):
            CorrelatedPairMiner(workers=0)


class TestSyntheticData:
    planted = [(0, 1), (2, 3), (4, 5)]

    @pytest.fixture(scope="class")
    def noisy(self):
        return generate_transactions(2000, 120, planted_pairs=self.planted,
                                     pair_rate=0.1, noise=0.02, seed=7)

    def test_perfectly_correlated_pairs_found(self):
        transactions = generate_transactions(500, 60, planted_pairs=self.planted,
                                             pair_rate=0.2, noise=0.0, seed=1)
        pairs = find_correlated_pairs(transactions, MinerConfig(minsup=5))
        found = {p.pair: p.phi for p in pairs}
        for pair in self.planted:
            assert found[pair] == pytest.approx(1.0)

    def test_planted_pairs_found(self, noisy):
        config = MinerConfig(theta=0.3, tau=0.05, k=1, minsup=5)
        miner = CorrelatedPairMiner(config)
        pairs = miner.find_correlated_pairs(noisy)
        found = {p.pair for p in pairs}
        assert set(self.planted) <= found
        assert found <= exact_pairs(miner.last_table, config.minsup, config.theta)

    def test_deterministic(self, noisy):
        config = MinerConfig(theta=0.3, minsup=5)
        first = find_correlated_pairs(noisy, config)
        second = find_correlated_pairs(noisy, config)
        assert [(p.pair, p.phi) for p in first] == [(p.pair, p.phi) for p in second]

    def test_parallel_matches_serial(self, noisy):
        config = MinerConfig(theta=0.3, minsup=5)
        serial = find_correlated_pairs(noisy, config)
        parallel = find_correlated_pairs(noisy, config, workers=4)
        assert [(p.pair, p.phi) for p in serial] == [(p.pair, p.phi) for p in parallel]

    def test_wider_bands(self, noisy):
        config = MinerConfig(theta=0.5, tau=0.05, k=2, minsup=5)
        found = {p.pair for p in find_correlated_pairs(noisy, config)}
        assert set(self.planted) <= found


class TestSplitBatches:
    def test_covers_everything_in_order(self):
        items = list(range(10))
        batches = split_batches(items, 3)
        assert [len(b) for b in batches] == [4, 3, 3]
        assert list(itertools.chain.from_iterable(batches)) == items

    def test_more_batches_than_items(self):
        assert split_batches([[1], [2]], 5) == [[[1]], [[2]]]
