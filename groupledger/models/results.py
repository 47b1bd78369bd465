"""
Result Models

Every logical failure in the ledger (duplicate name, unknown group or
member, empty registry) is an ordinary value, never an exception.
Callers inspect ``status`` (or ``success``) and decide how to report it.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from groupledger.models.ledger import Transaction, UserBalance


class LedgerStatus(str, Enum):
    """Outcome of a ledger operation."""
    OK = "ok"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    EMPTY = "empty"  # Query needs at least one member


class LedgerResult(BaseModel):
    """Outcome of a ledger operation, as returned by the facade."""
    
    status: LedgerStatus
    message: Optional[str] = Field(
        default=None,
        description="Human-readable explanation, set on failure"
    )
    
    @property
    def success(self) -> bool:
        return self.status == LedgerStatus.OK


class BalanceResult(LedgerResult):
    """Point lookup of one member's balance."""
    
    user_name: str
    balance: Optional[Decimal] = None


class MembersResult(LedgerResult):
    """
    Ordered member snapshots.
    
    Used for full listings (ascending balance), the under-paid set, and
    reconciliation reports.
    """
    
    members: list[UserBalance] = Field(default_factory=list)
    
    @property
    def names(self) -> list[str]:
        return [member.name for member in self.members]


class TransactionsResult(LedgerResult):
    """Most recent transactions of a group, newest first."""
    
    transactions: list[Transaction] = Field(default_factory=list)
