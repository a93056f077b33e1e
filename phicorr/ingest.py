"""
Transaction Ingestion - text lines to labeled integer transactions

Input format: one transaction per line, whitespace-separated labels.
Empty tokens are ignored; a blank line is an empty transaction (kept so
transaction indices follow line numbers).

Labels get dense integer ids in first-seen order. The label <-> id
mapping is an explicit, immutable LabelIndex value returned alongside
the transactions; nothing is stored globally.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple, Union


class LabelIndex:
    """
    Bidirectional label <-> id lookup, immutable after construction.

    Ids are 0..len-1 in the order labels were first seen.
    """

    __slots__ = ('_labels', '_ids')

    def __init__(self, labels: Sequence[str]):
        self._labels: Tuple[str, ...] = tuple(labels)
        self._ids: Dict[str, int] = {label: i for i, label in enumerate(self._labels)}
        if len(self._ids) != len(self._labels):
            raise ValueError("Labels must be unique")

    @classmethod
    def build(cls, transactions: Iterable[Iterable[str]]) -> LabelIndex:
        """Index every label of the given transactions in first-seen order."""
        seen: Dict[str, None] = {}
        for transaction in transactions:
            for label in transaction:
                seen.setdefault(label, None)
        return cls(list(seen))

    def id_of(self, label: str) -> int:
        return self._ids[label]

    def label_of(self, item: int) -> str:
        if item < 0:
            raise IndexError(f"Item id {item} out of range [0, {len(self) - 1}]")
        return self._labels[item]

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label) -> bool:
        return label in self._ids

    def __repr__(self) -> str:
        return f"LabelIndex({len(self)} labels)"


@dataclass(frozen=True)
class LabeledTransactions:
    """Integer transactions together with the LabelIndex that decodes them."""
    transactions: List[List[int]]
    labels: LabelIndex = field(repr=False)

    @classmethod
    def from_tokens(cls, token_lists: Iterable[Sequence[str]]) -> LabeledTransactions:
        token_lists = [list(tokens) for tokens in token_lists]
        index = LabelIndex.build(token_lists)
        transactions = [[index.id_of(label) for label in tokens] for tokens in token_lists]
        return cls(transactions, index)

    @property
    def max_item_id(self) -> int:
        """Highest id in use (-1 when no labels were seen)."""
        return len(self.labels) - 1

    def __len__(self) -> int:
        return len(self.transactions)


def tokenize(line: str) -> List[str]:
    """Split a line on whitespace, dropping empty tokens."""
    return line.split()


def read_transactions(lines: Iterable[str]) -> LabeledTransactions:
    """
    Read transactions from an iterable of text lines (e.g. an open file).

    Returns:
        LabeledTransactions with dense ids assigned in first-seen order
    """
    return LabeledTransactions.from_tokens(tokenize(line) for line in lines)


def read_transactions_file(path: Union[str, Path], encoding: str = 'utf-8',
                           errors: str = 'replace') -> LabeledTransactions:
    """
    Read a transaction file.

    Undecodable bytes become U+FFFD inside their label instead of aborting
    the read; pass errors='strict' to reject such files.

    Raises:
        OSError: File missing, unreadable or a directory. Raised before
            any transaction is processed
    """
    with open(path, 'r', encoding=encoding, errors=errors) as f:
        return read_transactions(f)


__all__ = [
    'LabelIndex',
    'LabeledTransactions',
    'read_transactions',
    'read_transactions_file',
    'tokenize',
]
