"""
LSH Banding - candidate pair generation from minhash signatures

Each signature of length k*t is cut into t bands of k consecutive slots.
Within one band, items whose k slot values hash to the same bucket key
become candidates. The candidate set is the union over all bands.

A pair whose slots agree with probability p matches a whole band with
probability p^k and is missed by every band with probability
(1 - p^k)^t. MinerConfig picks t so that this stays below tau for true
pairs, which makes banding sound for recall; precision is restored later
by exact phi confirmation.

Items that occur in no transaction are never bucketed: their rows are
all-sentinel and would otherwise collide with each other in every band.
"""

from __future__ import annotations
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Set, Tuple
import itertools
import os

import numpy as np

from .constants import SHARED_SEED
from .hashing import band_key
from .signatures import SignatureTable

ItemPair = Tuple[int, int]


def band_buckets(table: SignatureTable, band: int, k: int,
                 seed: int = SHARED_SEED) -> Dict[int, List[int]]:
    """
    Group present items by the bucket key of one band.

    Args:
        table: Accumulated signatures
        band: Band index v; covers slots [v*k, (v+1)*k)
        k: Band width
        seed: murmur3 seed for the bucket key

    Returns:
        {bucket_key: [item ids in ascending order]}
    """
    start = band * k
    if start + k > table.num_slots:
        raise ValueError(
            f"Band {band} of width {k} exceeds signature length {table.num_slots}"
        )
    rows = table.matrix[:, start:start + k]

    buckets: Dict[int, List[int]] = defaultdict(list)
    for item in table.present_items().tolist():
        buckets[band_key(rows[item], seed)].append(item)
    return buckets


def band_candidates(table: SignatureTable, band: int, k: int,
                    seed: int = SHARED_SEED) -> Set[ItemPair]:
    """Candidate pairs (i1 < i2) colliding in a single band."""
    candidates: Set[ItemPair] = set()
    for items in band_buckets(table, band, k, seed).values():
        # Singleton buckets are the common case for diverse items
        if len(items) > 1:
            candidates.update(itertools.combinations(items, 2))
    return candidates


def candidate_pairs(table: SignatureTable, k: int, t: int,
                    seed: int = SHARED_SEED, parallel: bool = False,
                    max_workers: Optional[int] = None) -> Set[ItemPair]:
    """
    Union of band candidates over all t bands.

    Bands are independent, so with parallel=True they are bucketed in a
    thread pool; the union does not depend on completion order.

    Args:
        table: Accumulated signatures, num_slots >= k*t
        k: Band width
        t: Number of bands
        seed: murmur3 seed for bucket keys
        parallel: If True, process bands concurrently
        max_workers: Number of parallel workers (None = CPU count)

    Returns:
        Set of canonical (i1, i2) pairs, possibly empty
    """
    if k * t > table.num_slots:
        raise ValueError(
            f"{t} bands of width {k} need {k * t} slots, table has {table.num_slots}"
        )

    if parallel:
        max_workers = max_workers or os.cpu_count()
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_band = list(executor.map(
                lambda v: band_candidates(table, v, k, seed),
                range(t)
            ))
    else:
        per_band = [band_candidates(table, v, k, seed) for v in range(t)]

    candidates: Set[ItemPair] = set()
    for pairs in per_band:
        candidates |= pairs
    return candidates


def estimate_similarity(sig1: np.ndarray, sig2: np.ndarray) -> float:
    """
    Fraction of slots on which two signatures agree.

    Approximates the Jaccard similarity of the two items' transaction sets.
    """
    if sig1.shape != sig2.shape:
        raise ValueError("Signatures must be of the same length.")
    if sig1.size == 0:
        return 1.0
    return float(np.count_nonzero(sig1 == sig2)) / sig1.size


__all__ = [
    'band_buckets',
    'band_candidates',
    'candidate_pairs',
    'estimate_similarity',
]
