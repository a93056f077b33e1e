# phicorr/constants.py
"""
Phi Correlation Miner Constants

This module defines constants used throughout the miner:

LAYER 1: Pipeline Defaults (Construction-time configuration)
- DEFAULT_THETA: Pairs must have phi correlation > theta
- DEFAULT_TAU: Tolerated fraction of missed true pairs (false negatives)
- DEFAULT_K: Band width (minhash slots that must all agree in one band)
- DEFAULT_MINSUP: Minimum number of transactions a pair must co-occur in

LAYER 2: Signature Layer
- SIGNATURE_DTYPE: Cell type of the flat signature matrix
- SIGNATURE_SENTINEL: "Not yet set" value every cell starts at
- SHARED_SEED: murmur3 seed for transaction and band hashing

LAYER 3: Reporting
- DEFAULT_TOP_N: Number of pairs the CLI prints
"""
import numpy as np


# =============================================================================
# LAYER 1: Pipeline Defaults
# =============================================================================

DEFAULT_THETA = 0.3   # Correlation threshold
DEFAULT_TAU = 0.05    # False negative tolerance
DEFAULT_K = 1         # Band width
DEFAULT_MINSUP = 5    # Minimum co-occurrence support

assert 0 < DEFAULT_THETA < 1, "theta must satisfy 0 < θ < 1"
assert 0 < DEFAULT_TAU < 1, "tau must satisfy 0 < τ < 1"


# =============================================================================
# LAYER 2: Signature Layer
# =============================================================================

# Minhash values live in 32-bit modular arithmetic: (h1 + u*h2) mod 2^32
SIGNATURE_DTYPE = np.uint32
UINT32_MASK = 0xFFFFFFFF
SIGNATURE_SENTINEL = UINT32_MASK  # Maximal uint32, cells only ever decrease

SHARED_SEED = 0

# Pair count tables grow with the square of transaction width. Past this many
# distinct pairs the accumulator logs a warning; it never truncates.
PAIR_COUNT_WARN_THRESHOLD = 10_000_000


# =============================================================================
# LAYER 3: Reporting
# =============================================================================

DEFAULT_TOP_N = 100
