"""
Miner Configuration - Immutable Parameter Set

MinerConfig is the SINGLE SOURCE OF TRUTH for pipeline parameters.
Every stage (accumulator, banding, confirmation) reads its settings
from one instance, so the derived band count can never drift away
from the threshold, tolerance and band width it was computed from.

Band count derivation:
    A band of width k matches for a true pair with probability θ^(2k).
    Missing the pair in all t independent bands happens with
    probability (1 - θ^(2k))^t. The smallest t keeping that below τ is

        t = ceil(ln(τ) / ln(1 - θ^(2k)))

Usage:
    config = MinerConfig(theta=0.5, tau=0.01, k=2)
    config.t                       # derived, read-only
    looser = config.replace(tau=0.1)   # new instance, t recomputed
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import math
import numbers

from .constants import (
    DEFAULT_THETA,
    DEFAULT_TAU,
    DEFAULT_K,
    DEFAULT_MINSUP,
    SHARED_SEED,
)


def derive_band_count(theta: float, tau: float, k: int) -> int:
    """
    Number of independent bands needed to keep false negatives below tau.

    Args:
        theta: Correlation threshold, 0 < theta < 1
        tau: Tolerated false negative fraction, 0 < tau < 1
        k: Band width, >= 1

    Returns:
        Smallest t with (1 - theta^(2k))^t <= tau
    """
    _validate_band_params(theta, tau, k)
    band_match = theta ** (2 * k)
    return int(math.ceil(math.log(tau) / math.log1p(-band_match)))


def _validate_band_params(theta: float, tau: float, k: int) -> None:
    if not 0 < theta < 1:
        raise ValueError(f"theta must satisfy 0 < theta < 1, got {theta}")
    if not 0 < tau < 1:
        raise ValueError(f"tau must satisfy 0 < tau < 1, got {tau}")
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
        raise ValueError(f"k must be an integer >= 1, got {k!r}")


@dataclass(frozen=True)
class MinerConfig:
    """
    Immutable configuration for the correlated pair miner.

    Attributes:
        theta: Pairs are reported when phi > theta
        tau: Tolerated fraction of true pairs missed by banding
        k: Number of minhash slots per band that must all agree
        minsup: Minimum number of transactions a pair must share
        seed: murmur3 seed for transaction and band hashing

    Raises:
        ValueError: theta or tau outside (0, 1), k < 1, minsup < 1 or a seed
            outside [0, 2^32)
    """
    theta: float = DEFAULT_THETA
    tau: float = DEFAULT_TAU
    k: int = DEFAULT_K
    minsup: int = DEFAULT_MINSUP
    seed: int = SHARED_SEED

    def __post_init__(self):
        _validate_band_params(self.theta, self.tau, self.k)
        if isinstance(self.minsup, bool) or not isinstance(self.minsup, numbers.Integral) or self.minsup < 1:
            raise ValueError(f"minsup must be an integer >= 1, got {self.minsup!r}")
        if not 0 <= self.seed < 2 ** 32:
            raise ValueError(f"seed must fit in 32 bits, got {self.seed}")

    @property
    def t(self) -> int:
        """Number of bands, derived from theta, tau and k."""
        return derive_band_count(self.theta, self.tau, self.k)

    @property
    def num_slots(self) -> int:
        """Signature length per item (k * t)."""
        return self.k * self.t

    def replace(self, **changes) -> MinerConfig:
        """Return a new config with some fields changed (t is recomputed)."""
        return replace(self, **changes)


DEFAULT_CONFIG = MinerConfig()


__all__ = [
    'MinerConfig',
    'DEFAULT_CONFIG',
    'derive_band_count',
]
