"""
Hashing - murmur3 based minhash slot generation and band keys

Two hashes generate many:
    Each transaction index j is hashed ONCE with murmur3 x64-128.
    The low 64 bits split into two 32-bit components (h1, h2), and slot u
    of the signature receives

        g_u(j) = (h1 + u * h2) mod 2^32

    This approximates k*t independent minhash functions from two base
    hashes ("Less Hashing, Same Performance", Kirsch & Mitzenmacher).

Wraparound:
    The modulo 2^32 is explicit (computed in uint64, masked, stored as
    uint32) so slot values are reproducible bit-for-bit on any platform.
    The (h1, h2) split matches Guava's murmur3_128().hashInt(j).asLong().
"""

from __future__ import annotations
from typing import Tuple
import struct

import mmh3
import numpy as np

from .constants import SHARED_SEED, SIGNATURE_DTYPE, UINT32_MASK


def transaction_hashes(j: int, seed: int = SHARED_SEED) -> Tuple[int, int]:
    """
    Derive the two 32-bit hash components for transaction index j.

    Args:
        j: Transaction index (0 <= j < 2^32)
        seed: murmur3 seed, fixed for a whole run

    Returns:
        (h1, h2) unsigned 32-bit integers
    """
    low64, _ = mmh3.hash64(struct.pack('<I', j), seed=seed, x64arch=True, signed=False)
    return low64 & UINT32_MASK, low64 >> 32


def derive_slots(h1: int, h2: int, num_slots: int) -> np.ndarray:
    """
    Compute (h1 + u*h2) mod 2^32 for every slot u in [0, num_slots).

    Returns:
        np.ndarray of shape (num_slots,) with dtype uint32
    """
    u = np.arange(num_slots, dtype=np.uint64)
    values = (np.uint64(h1) + u * np.uint64(h2)) & np.uint64(UINT32_MASK)
    return values.astype(SIGNATURE_DTYPE)


def band_key(values: np.ndarray, seed: int = SHARED_SEED) -> int:
    """
    Hash the k signature values of one band into a bucket key.

    Values are encoded as little-endian uint32 before hashing so the key
    does not depend on host byte order.
    """
    data = np.ascontiguousarray(values, dtype='<u4').tobytes()
    key, _ = mmh3.hash64(data, seed=seed, x64arch=True, signed=False)
    return key


__all__ = [
    'transaction_hashes',
    'derive_slots',
    'band_key',
]
