"""Balance query package."""

from groupledger.queries.balances import BalanceQueryExecutor

__all__ = ["BalanceQueryExecutor"]
