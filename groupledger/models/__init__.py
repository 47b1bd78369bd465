"""
Data Models Package

This package contains all Pydantic models used in the Group Ledger.
Everything the ledger hands back to callers conforms to these schemas.
"""

from groupledger.models.ledger import (
    ZERO,
    Transaction,
    UserBalance,
    exact_sum,
    format_amount,
)
from groupledger.models.results import (
    BalanceResult,
    LedgerResult,
    LedgerStatus,
    MembersResult,
    TransactionsResult,
)
from groupledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "ZERO",
    "Transaction",
    "UserBalance",
    "exact_sum",
    "format_amount",
    # Results
    "BalanceResult",
    "LedgerResult",
    "LedgerStatus",
    "MembersResult",
    "TransactionsResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
