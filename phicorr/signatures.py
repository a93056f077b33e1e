"""
SignatureTable - Minhash Signatures with Fused Occurrence Counting

Design principles:
- One pass over the transactions builds everything the later stages read:
  the signature matrix, item occurrence counts and pair co-occurrence counts
- Tables are frozen (read-only numpy buffers) once built
- All updates are associative and commutative: min for signatures,
  sum for counts. Partial tables over disjoint transaction ranges merge
  into exactly the table a single pass would have produced

Signature layout:
    A flat uint32 array of length (max_item_id + 1) * num_slots.
    Row i (slots [i*num_slots, (i+1)*num_slots)) is item i's signature.
    Every cell starts at SIGNATURE_SENTINEL and only ever decreases.
    Items that occur in no transaction keep an all-sentinel row.

Batch Processing Pattern:
    # Single pass
    table = SignatureTable.from_transactions(transactions, num_slots=32)

    # Partitioned, optionally parallel
    table = SignatureTable.from_batches([part1, part2], num_slots=32, parallel=True)

    # Merging independently built partial tables
    table = SignatureTable.merge([table_a, table_b])

Memory:
    Signatures cost O(#items * num_slots). Pair counts cost
    O(#distinct co-occurring pairs), which grows with the square of
    transaction width; large tables are reported, never truncated.
"""

from __future__ import annotations
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import itertools
import logging
import os

import numpy as np

from .constants import (
    PAIR_COUNT_WARN_THRESHOLD,
    SHARED_SEED,
    SIGNATURE_DTYPE,
    SIGNATURE_SENTINEL,
)
from .hashing import derive_slots, transaction_hashes

logger = logging.getLogger(__name__)

Transaction = Sequence[int]
ItemPair = Tuple[int, int]


def max_item_id_of(transactions: Iterable[Transaction]) -> int:
    """Largest item id in any transaction, -1 when there are no items."""
    return max((max(t) for t in transactions if len(t) > 0), default=-1)


def _distinct_items(transaction: Transaction, max_item_id: int) -> np.ndarray:
    ids = np.unique(np.asarray(transaction, dtype=np.int64))
    if ids.size and (ids[0] < 0 or ids[-1] > max_item_id):
        raise ValueError(
            f"Item ids must lie in [0, {max_item_id}], got range [{ids[0]}, {ids[-1]}]"
        )
    return ids


class SignatureTable:
    """
    Minhash signatures plus occurrence and co-occurrence counts.

    Treat instances as immutable. Build with from_transactions(),
    from_batches() or merge().

    Attributes:
        signatures: Flat uint32 array, (n_items * num_slots,)
        occurrences: int64 array, transactions containing each item
        pair_counts: {(i1, i2): count} with i1 < i2
        n_transactions: Number of transactions accumulated (N)
        num_slots: Signature length per item (k * t)
    """

    def __init__(self, signatures: np.ndarray, occurrences: np.ndarray,
                 pair_counts: Dict[ItemPair, int], n_transactions: int,
                 num_slots: int):
        if signatures.shape != (occurrences.shape[0] * num_slots,):
            raise ValueError(
                f"Signature buffer of shape {signatures.shape} does not match "
                f"{occurrences.shape[0]} items x {num_slots} slots"
            )
        self.signatures = signatures
        self.occurrences = occurrences
        self.pair_counts = pair_counts
        self.n_transactions = n_transactions
        self.num_slots = num_slots
        self.signatures.flags.writeable = False
        self.occurrences.flags.writeable = False

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_transactions(cls, transactions: Sequence[Transaction], num_slots: int,
                          max_item_id: Optional[int] = None,
                          seed: int = SHARED_SEED, start: int = 0) -> SignatureTable:
        """
        Accumulate signatures and counts in a single pass.

        Args:
            transactions: Integer transactions; duplicates within one
                transaction are counted once
            num_slots: Signature length per item (k * t)
            max_item_id: Upper bound on item ids (default: largest id present)
            seed: murmur3 seed for transaction hashing
            start: Global index of transactions[0]. Partitioned builds pass
                their offset so every transaction keeps its global hash

        Returns:
            New frozen SignatureTable

        Raises:
            ValueError: num_slots < 1, or an item id outside [0, max_item_id]
        """
        if num_slots < 1:
            raise ValueError(f"num_slots must be >= 1, got {num_slots}")
        if max_item_id is None:
            max_item_id = max_item_id_of(transactions)
        n_items = max_item_id + 1

        signatures = np.full(n_items * num_slots, SIGNATURE_SENTINEL, dtype=SIGNATURE_DTYPE)
        matrix = signatures.reshape(n_items, num_slots)
        occurrences = np.zeros(n_items, dtype=np.int64)
        pair_counts: Counter = Counter()

        for j, transaction in enumerate(transactions, start=start):
            ids = _distinct_items(transaction, max_item_id)
            if ids.size == 0:
                continue

            h1, h2 = transaction_hashes(j, seed)
            slots = derive_slots(h1, h2, num_slots)
            # ids are distinct, so fancy assignment never races with itself
            matrix[ids] = np.minimum(matrix[ids], slots)
            occurrences[ids] += 1
            pair_counts.update(itertools.combinations(ids.tolist(), 2))

        table = cls(signatures, occurrences, dict(pair_counts),
                    len(transactions), num_slots)
        table._report_size()
        return table

    @classmethod
    def from_batches(cls, batches: List[Sequence[Transaction]], num_slots: int,
                     max_item_id: Optional[int] = None, seed: int = SHARED_SEED,
                     parallel: bool = False,
                     max_workers: Optional[int] = None) -> SignatureTable:
        """
        Build from consecutive batches of transactions, optionally in parallel.

        Batch b covers global transaction indices starting after all
        transactions of batches 0..b-1. Each batch is accumulated on its
        own and the partial tables are merged.

        Args:
            batches: Consecutive slices of the transaction list
            num_slots: Signature length per item (k * t)
            max_item_id: Upper bound on item ids (default: largest id present)
            seed: murmur3 seed
            parallel: If True, accumulate batches in a thread pool
            max_workers: Number of parallel workers (None = CPU count)

        Returns:
            New frozen SignatureTable identical to a single-pass build
        """
        if max_item_id is None:
            max_item_id = max((max_item_id_of(b) for b in batches), default=-1)

        offsets = [0]
        for batch in batches[:-1]:
            offsets.append(offsets[-1] + len(batch))

        def build(batch_and_offset):
            batch, offset = batch_and_offset
            return cls.from_transactions(batch, num_slots, max_item_id=max_item_id,
                                         seed=seed, start=offset)

        if not batches:
            return cls.from_transactions([], num_slots, max_item_id=max_item_id, seed=seed)

        if parallel:
            max_workers = max_workers or os.cpu_count()
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                tables = list(executor.map(build, zip(batches, offsets)))
        else:
            tables = [build(pair) for pair in zip(batches, offsets)]

        return cls.merge(tables)

    @classmethod
    def merge(cls, tables: List[SignatureTable]) -> SignatureTable:
        """
        Merge partial tables built over disjoint transaction ranges.

        Signatures combine by elementwise minimum, counts by sum. The
        result does not depend on the order of the inputs.

        Raises:
            ValueError: Empty input, or tables with different shapes
        """
        if not tables:
            raise ValueError("Cannot merge empty list")
        if len(tables) == 1:
            return tables[0]

        first = tables[0]
        if not all(t.num_slots == first.num_slots and t.n_items == first.n_items
                   for t in tables):
            raise ValueError("Cannot merge SignatureTables with different shapes")

        signatures = np.minimum.reduce(np.stack([t.signatures for t in tables], axis=0))
        occurrences = np.sum(np.stack([t.occurrences for t in tables], axis=0), axis=0)
        pair_counts: Counter = Counter()
        for t in tables:
            pair_counts.update(t.pair_counts)

        merged = cls(signatures, occurrences, dict(pair_counts),
                     sum(t.n_transactions for t in tables), first.num_slots)
        merged._report_size()
        return merged

    def _report_size(self):
        logger.debug("Accumulated %d transactions: %d items, %d distinct pairs",
                     self.n_transactions, self.n_items, len(self.pair_counts))
        if len(self.pair_counts) > PAIR_COUNT_WARN_THRESHOLD:
            logger.warning(
                "Pair count table holds %d distinct pairs (threshold %d); memory grows "
                "with the square of transaction width",
                len(self.pair_counts), PAIR_COUNT_WARN_THRESHOLD,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def n_items(self) -> int:
        """Number of signature rows (max_item_id + 1)."""
        return self.occurrences.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        """Read-only (n_items, num_slots) view of the signatures."""
        return self.signatures.reshape(self.n_items, self.num_slots)

    def signature(self, item: int) -> np.ndarray:
        return self.matrix[item]

    def present_items(self) -> np.ndarray:
        """Ids of items occurring in at least one transaction."""
        return np.flatnonzero(self.occurrences)

    def occurrence(self, item: int) -> int:
        return int(self.occurrences[item])

    def pair_count(self, i1: int, i2: int) -> int:
        """Co-occurrence count for an unordered pair (either order)."""
        if i1 > i2:
            i1, i2 = i2, i1
        return self.pair_counts.get((i1, i2), 0)

    def __repr__(self) -> str:
        return (f"SignatureTable(N={self.n_transactions}, items={self.n_items}, "
                f"slots={self.num_slots}, pairs={len(self.pair_counts)})")


def accumulate(transactions: Sequence[Transaction], num_slots: int,
               max_item_id: Optional[int] = None,
               seed: int = SHARED_SEED) -> SignatureTable:
    """Single-pass accumulation (alias for SignatureTable.from_transactions)."""
    return SignatureTable.from_transactions(transactions, num_slots,
                                            max_item_id=max_item_id, seed=seed)


__all__ = [
    'SignatureTable',
    'accumulate',
    'max_item_id_of',
]
