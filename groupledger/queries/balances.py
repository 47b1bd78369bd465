"""
Balance Query Engine

DESIGN DECISION: Queries are read-only. They never reorder the registry
or touch the transaction log; they only package what is there into
result models.

GUARANTEES:
- Unknown members come back as NOT_FOUND, never as a zero balance
- The under-paid query on an empty group is EMPTY, not an empty OK
"""

from groupledger.catalog import Group
from groupledger.models import (
    BalanceResult,
    LedgerStatus,
    MembersResult,
    UserBalance,
)


class BalanceQueryExecutor:
    """
    Executes read-only balance queries against one group.
    
    Point lookups and listings read the registry. Reconciliation also
    reads the transaction log, which is the source of truth.
    """
    
    def __init__(self, group: Group):
        self._group = group
    
    def user_balance(self, user_name: str) -> BalanceResult:
        member = self._group.users.find_user(user_name)
        if member is None:
            return BalanceResult(
                status=LedgerStatus.NOT_FOUND,
                message=f"User {user_name} is not in group {self._group.name}",
                user_name=user_name,
            )
        return BalanceResult(
            status=LedgerStatus.OK,
            user_name=user_name,
            balance=member.balance,
        )
    
    def under_paid(self) -> MembersResult:
        """Members tied for the lowest balance, in list order."""
        if self._group.users.is_empty:
            return MembersResult(
                status=LedgerStatus.EMPTY,
                message=f"Group {self._group.name} has no users",
            )
        return MembersResult(
            status=LedgerStatus.OK,
            members=list(self._group.users.under_paid()),
        )
    
    def list_balances(self) -> MembersResult:
        """All members, lowest balance first."""
        return MembersResult(
            status=LedgerStatus.OK,
            members=list(self._group.users.list_users()),
        )
    
    def find_discrepancies(self) -> MembersResult:
        """
        Compare cached balances with the transaction log.
        
        Returns the members whose cached balance differs from the sum of
        their logged transactions. The reported balance is the log's total.
        """
        log = self._group.transactions
        mismatched = []
        for member in self._group.users.list_users():
            expected = log.total_for_user(member.name)
            if expected != member.balance:
                mismatched.append(UserBalance(name=member.name, balance=expected))
        
        return MembersResult(
            status=LedgerStatus.OK,
            message=(
                f"{len(mismatched)} balances differ from the transaction log"
                if mismatched else None
            ),
            members=mismatched,
        )
