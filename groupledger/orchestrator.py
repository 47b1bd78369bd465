"""
Main Orchestrator for Group Ledger

This module ties together the catalog, each group's user registry and
transaction log, and the balance queries. It exposes the operations a
caller (a CLI, a bot, a test harness) needs, keyed by group name.

DESIGN DECISION: Operations that span the registry and the log are
explicit two-step flows here, not side effects of either structure:
- Posting: verify member -> append to log -> update and reposition balance
- Removal: unlink from registry -> purge the member's transactions

Logical failures come back as result models. Nothing here catches
MemoryError; running out of memory is fatal.
"""

from decimal import Decimal
from typing import Optional, Union

from groupledger.audit import (
    AuditLogger,
    InMemoryAuditTrail,
    configure_logging,
    create_correlation_id,
)
from groupledger.catalog import Group, GroupCatalog
from groupledger.config import LedgerSettings, get_settings
from groupledger.models import (
    BalanceResult,
    LedgerResult,
    LedgerStatus,
    MembersResult,
    Transaction,
    TransactionsResult,
    format_amount,
)
from groupledger.queries import BalanceQueryExecutor


Amount = Union[Decimal, int, float, str]


class GroupLedger:
    """
    Entry point for all group operations.
    
    Every group-scoped operation first resolves the group by name; an
    unknown group is reported as NOT_FOUND like any other missing entity.
    """
    
    def __init__(
        self,
        catalog: Optional[GroupCatalog] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
    ):
        self._catalog = catalog if catalog is not None else GroupCatalog()
        self._audit_logger = audit_logger
        self._settings = settings or get_settings()
    
    @property
    def catalog(self) -> GroupCatalog:
        return self._catalog

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    def format(self, amount: Decimal) -> str:
        """Format an amount using the configured symbol and places."""
        return format_amount(
            amount,
            places=self._settings.display_places,
            symbol=self._settings.currency_symbol,
        )
    
    # -------------------------------------------------------------------------
    # Groups
    # -------------------------------------------------------------------------
    
    def add_group(self, group_name: str) -> LedgerResult:
        status = self._catalog.add_group(group_name)
        if status == LedgerStatus.ALREADY_EXISTS:
            if self._audit_logger:
                self._audit_logger.log_duplicate_rejected("group", group_name)
            return LedgerResult(
                status=status,
                message=f"Group {group_name} already exists",
            )
        
        if self._audit_logger:
            self._audit_logger.log_group_created(group_name)
        return LedgerResult(status=status)
    
    def list_groups(self) -> list[str]:
        """Group names in creation order."""
        return self._catalog.list_groups()
    
    def find_group(self, group_name: str) -> Optional[Group]:
        return self._catalog.find_group(group_name)
    
    def _resolve(self, group_name: str) -> Optional[Group]:
        group = self._catalog.find_group(group_name)
        if group is None and self._audit_logger:
            self._audit_logger.log_lookup_failed("group", group_name)
        return group
    
    @staticmethod
    def _group_not_found(group_name: str) -> dict:
        return {
            "status": LedgerStatus.NOT_FOUND,
            "message": f"Group {group_name} does not exist",
        }
    
    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------
    
    def add_user(self, group_name: str, user_name: str) -> LedgerResult:
        group = self._resolve(group_name)
        if group is None:
            return LedgerResult(**self._group_not_found(group_name))
        
        status = group.users.add_user(user_name)
        if status == LedgerStatus.ALREADY_EXISTS:
            if self._audit_logger:
                self._audit_logger.log_duplicate_rejected("user", user_name, group_name)
            return LedgerResult(
                status=status,
                message=f"User {user_name} is already in group {group_name}",
            )
        
        if self._audit_logger:
            self._audit_logger.log_user_added(group_name, user_name)
        return LedgerResult(status=status)
    
    def list_users(self, group_name: str) -> MembersResult:
        """Members with balances, lowest balance first."""
        group = self._resolve(group_name)
        if group is None:
            return MembersResult(**self._group_not_found(group_name))
        return BalanceQueryExecutor(group).list_balances()
    
    def remove_user(self, group_name: str, user_name: str) -> LedgerResult:
        """Remove a member and every transaction posted for them."""
        group = self._resolve(group_name)
        if group is None:
            return LedgerResult(**self._group_not_found(group_name))
        
        status = group.users.remove_user(user_name)
        if status == LedgerStatus.NOT_FOUND:
            if self._audit_logger:
                self._audit_logger.log_lookup_failed("user", user_name, group_name)
            return LedgerResult(
                status=status,
                message=f"User {user_name} is not in group {group_name}",
            )
        
        purged = group.transactions.remove_for_user(user_name)
        
        if self._audit_logger:
            self._audit_logger.log_user_removed(
                group_name,
                user_name,
                purged_count=purged,
                correlation_id=create_correlation_id(),
            )
        return LedgerResult(status=status)
    
    # -------------------------------------------------------------------------
    # Balances
    # -------------------------------------------------------------------------
    
    def user_balance(self, group_name: str, user_name: str) -> BalanceResult:
        group = self._resolve(group_name)
        if group is None:
            return BalanceResult(user_name=user_name, **self._group_not_found(group_name))
        
        result = BalanceQueryExecutor(group).user_balance(user_name)
        if not result.success and self._audit_logger:
            self._audit_logger.log_lookup_failed("user", user_name, group_name)
        return result
    
    def under_paid(self, group_name: str) -> MembersResult:
        """Members tied for the lowest balance; EMPTY if the group has none."""
        group = self._resolve(group_name)
        if group is None:
            return MembersResult(**self._group_not_found(group_name))
        
        result = BalanceQueryExecutor(group).under_paid()
        if self._audit_logger:
            self._audit_logger.log_query_executed(
                group_name, "under_paid", len(result.members)
            )
        return result
    
    def reconcile(self, group_name: str) -> MembersResult:
        """Members whose cached balance disagrees with the transaction log."""
        group = self._resolve(group_name)
        if group is None:
            return MembersResult(**self._group_not_found(group_name))
        
        result = BalanceQueryExecutor(group).find_discrepancies()
        if self._audit_logger:
            self._audit_logger.log_query_executed(
                group_name, "reconcile", len(result.members)
            )
        return result
    
    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------
    
    def add_xct(
        self,
        group_name: str,
        user_name: str,
        amount: Amount,
    ) -> LedgerResult:
        """
        Post a signed amount for a member.
        
        The transaction is logged first, then the member's balance is
        updated and the member moved at most one place in the registry.
        
        Raises:
            pydantic.ValidationError: If amount is not a finite decimal.
                Raised before anything is mutated.
        """
        group = self._resolve(group_name)
        if group is None:
            return LedgerResult(**self._group_not_found(group_name))
        
        if user_name not in group.users:
            if self._audit_logger:
                self._audit_logger.log_lookup_failed("user", user_name, group_name)
            return LedgerResult(
                status=LedgerStatus.NOT_FOUND,
                message=f"User {user_name} is not in group {group_name}",
            )
        
        transaction = Transaction(user_name=user_name, amount=amount)
        display_amount = transaction.formatted_amount(
            places=self._settings.display_places,
            symbol=self._settings.currency_symbol,
        )
        group.transactions.post(transaction)
        group.users.post_amount(user_name, transaction.amount)
        
        if self._audit_logger:
            self._audit_logger.log_transaction_posted(
                group_name,
                transaction.transaction_id,
                user_name,
                display_amount,
            )
        return LedgerResult(status=LedgerStatus.OK)
    
    def recent_xct(
        self,
        group_name: str,
        count: Optional[int] = None,
    ) -> TransactionsResult:
        """Up to ``count`` most recent transactions, newest first."""
        group = self._resolve(group_name)
        if group is None:
            return TransactionsResult(**self._group_not_found(group_name))
        
        if count is None:
            count = self._settings.default_recent_count
        return TransactionsResult(
            status=LedgerStatus.OK,
            transactions=list(group.transactions.recent(count)),
        )


def create_ledger(
    settings: Optional[LedgerSettings] = None,
) -> GroupLedger:
    """
    Factory function to create a ready-to-use ledger.
    
    Configures logging from settings and, when auditing is enabled,
    attaches an in-memory audit trail.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    
    audit_logger = None
    if settings.audit_enabled:
        audit_logger = AuditLogger(InMemoryAuditTrail(settings.audit_trail_size))
    
    return GroupLedger(audit_logger=audit_logger, settings=settings)
