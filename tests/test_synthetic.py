"""
Tests for the synthetic transaction generator
"""

import pytest

from phicorr.cli import main
from phicorr.synthetic import generate_transactions, to_lines


class TestGenerateTransactions:
    def test_reproducible(self):
        a = generate_transactions(50, 20, planted_pairs=[(0, 1)], seed=5)
        b = generate_transactions(50, 20, planted_pairs=[(0, 1)], seed=5)
        assert a == b

    def test_shape(self):
        transactions = generate_transactions(30, 15, min_size=2, max_size=4, seed=1)
        assert len(transactions) == 30
        for t in transactions:
            assert 2 <= len(t) <= 4
            assert len(set(t)) == len(t)
            assert all(0 <= i < 15 for i in t)

    def test_planted_items_only_from_pairs(self):
        transactions = generate_transactions(200, 10, planted_pairs=[(0, 1)],
                                             pair_rate=0.3, noise=0.0, seed=2)
        for t in transactions:
            assert (0 in t) == (1 in t)

    def test_planted_item_out_of_range(self):
        with pytest.raises(ValueError):
            generate_transactions(5, 4, planted_pairs=[(0, 9)])


class TestToLines:
    def test_render(self):
        assert to_lines([[0, 1], [2], []], prefix="sku_") == ["sku_0 sku_1", "sku_2", ""]

    def test_cli_round_trip(self, tmp_path, capsys):
        transactions = generate_transactions(300, 40, planted_pairs=[(0, 1)],
                                             pair_rate=0.2, noise=0.0, seed=3)
        path = tmp_path / "baskets.txt"
        path.write_text("\n".join(to_lines(transactions)) + "\n", encoding="utf-8")
        assert main([str(path)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split()[-1] == "1.000"
        assert {"item_0", "item_1"} == set(lines[0].split()[:2])
