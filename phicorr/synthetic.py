"""
Synthetic Transaction Generation

Reproducible random baskets with planted correlated pairs, for testing
and benchmarking the miner against a known answer.

Each transaction holds a uniformly random handful of "background" items.
Every planted pair (a, b) additionally appears as a whole with
probability pair_rate, and otherwise contributes just one of its two
items with probability noise. Planted items never appear as background,
so raising noise lowers the pair's phi in a controlled way.

Usage:
    from phicorr.synthetic import generate_transactions, to_lines

    transactions = generate_transactions(5_000, 200, planted_pairs=[(0, 1), (2, 3)], seed=7)
    lines = to_lines(transactions, prefix="sku_")
"""

from typing import List, Optional, Sequence, Tuple
import numpy as np


def generate_transactions(n_transactions: int, n_items: int,
                          planted_pairs: Sequence[Tuple[int, int]] = (),
                          min_size: int = 2, max_size: int = 6,
                          pair_rate: float = 0.1, noise: float = 0.02,
                          seed: Optional[int] = None) -> List[List[int]]:
    """
    Generate n_transactions random baskets over item ids [0, n_items).

    Args:
        n_transactions: Number of transactions
        n_items: Size of the item universe
        planted_pairs: Item pairs that tend to occur together
        min_size: Minimum background items per transaction
        max_size: Maximum background items per transaction
        pair_rate: Probability a planted pair appears together
        noise: Probability a planted pair contributes only one item
        seed: Random seed for reproducibility (None = random)

    Returns:
        List of transactions (lists of item ids)

    Example:
        >>> txs = generate_transactions(3, 10, planted_pairs=[(0, 1)], seed=1)
        >>> len(txs)
        3
    """
    if seed is not None:
        rng = np.random.default_rng(seed)
    else:
        rng = np.random.default_rng()

    planted = {item for pair in planted_pairs for item in pair}
    if any(not 0 <= item < n_items for item in planted):
        raise ValueError(f"Planted items must lie in [0, {n_items})")
    background = np.array([i for i in range(n_items) if i not in planted], dtype=np.int64)
    max_size = min(max_size, background.size)
    min_size = min(min_size, max_size)

    transactions = []
    for _ in range(n_transactions):
        size = int(rng.integers(min_size, max_size + 1))
        basket = rng.choice(background, size=size, replace=False).tolist() if size else []
        for a, b in planted_pairs:
            roll = rng.random()
            if roll < pair_rate:
                basket.extend((a, b))
            elif roll < pair_rate + noise:
                basket.append(a if rng.random() < 0.5 else b)
        transactions.append(basket)
    return transactions


def to_lines(transactions: Sequence[Sequence[int]], prefix: str = "item_") -> List[str]:
    """
    Render integer transactions as whitespace-separated label lines.

    Example:
        >>> to_lines([[0, 1], [2]], prefix="sku_")
        ['sku_0 sku_1', 'sku_2']
    """
    return [" ".join(f"{prefix}{i}" for i in t) for t in transactions]


__all__ = [
    'generate_transactions',
    'to_lines',
]
