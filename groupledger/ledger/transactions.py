"""
Transaction Log

Per-group history of posted amounts, newest first.

DESIGN DECISION: The log is the source of truth for balances. The user
registry only caches running totals, which ``total_for_user`` can always
recompute from here.
"""

from collections import deque
from decimal import Decimal
from itertools import islice
from typing import Iterator

from groupledger.models import ZERO, Transaction, exact_sum


class TransactionLog:
    """Newest-first sequence of transactions for one group."""
    
    def __init__(self):
        self._entries: deque[Transaction] = deque()
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._entries)
    
    def post(self, transaction: Transaction) -> None:
        """Record a transaction as the most recent entry."""
        self._entries.appendleft(transaction)
    
    def remove_for_user(self, user_name: str) -> int:
        """
        Drop every transaction attributed to ``user_name``.
        
        The relative order of the remaining entries is preserved.
        Returns the number of transactions removed (0 is a no-op).
        """
        kept = deque(txn for txn in self._entries if txn.user_name != user_name)
        removed = len(self._entries) - len(kept)
        if removed:
            self._entries = kept
        return removed
    
    def recent(self, count: int) -> Iterator[Transaction]:
        """Yield up to ``count`` transactions, most recent first."""
        if count <= 0:
            return iter(())
        return islice(self._entries, count)
    
    def for_user(self, user_name: str) -> Iterator[Transaction]:
        return (txn for txn in self._entries if txn.user_name == user_name)
    
    def total_for_user(self, user_name: str) -> Decimal:
        total = ZERO
        for txn in self.for_user(user_name):
            total = exact_sum(total, txn.amount)
        return total
