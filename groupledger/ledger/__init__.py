"""Transaction log package."""

from groupledger.ledger.transactions import TransactionLog

__all__ = ["TransactionLog"]
