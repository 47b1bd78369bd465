"""
Group Ledger - Source Package

An in-memory ledger for shared-expense groups. Each group keeps its
members ordered by running balance and an append-only history of
transactions, so it can always answer "who has paid the least?".

DESIGN PRINCIPLES:
1. The transaction log is the source of truth; balances are a cache
2. Logical failures are result values, never exceptions
3. Every mutation is auditable
4. Each group owns its members and transactions exclusively
"""

__version__ = "1.0.0"
__author__ = "Group Ledger Team"
