"""
phicorr - Highly Correlated Pair Mining

Finds pairs of items whose presence across transactions has a phi
correlation above a threshold, using minhash signatures and LSH banding
to avoid comparing every pair of items.

Quick Start:
    >>> from phicorr import CorrelatedPairMiner, MinerConfig
    >>>
    >>> miner = CorrelatedPairMiner(MinerConfig(theta=0.3, tau=0.05, k=1, minsup=5))
    >>> pairs = miner.find_correlated_pairs(transactions)
    >>> for p in pairs[:10]:
    ...     print(p.i1, p.i2, round(p.phi, 3))
"""

__version__ = "0.1.0"

from .config import MinerConfig, DEFAULT_CONFIG, derive_band_count
from .signatures import SignatureTable, accumulate
from .lsh import candidate_pairs, band_candidates, estimate_similarity
from .phi import CorrelatedPair, phi_coefficient, confirm_candidates, rank_pairs
from .miner import CorrelatedPairMiner, find_correlated_pairs
from .ingest import LabelIndex, LabeledTransactions, read_transactions, read_transactions_file
from .report import top_pairs, format_report

__all__ = [
    # Configuration
    "MinerConfig",
    "DEFAULT_CONFIG",
    "derive_band_count",
    # Pipeline stages
    "SignatureTable",
    "accumulate",
    "candidate_pairs",
    "band_candidates",
    "estimate_similarity",
    "CorrelatedPair",
    "phi_coefficient",
    "confirm_candidates",
    "rank_pairs",
    # Orchestration
    "CorrelatedPairMiner",
    "find_correlated_pairs",
    # Collaborators
    "LabelIndex",
    "LabeledTransactions",
    "read_transactions",
    "read_transactions_file",
    "top_pairs",
    "format_report",
]
