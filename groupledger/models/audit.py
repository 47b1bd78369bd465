"""
Audit Models for Group Ledger

Every mutation of a group (and every rejected attempt) is recorded as an
audit event. This provides:
1. Traceability of who was charged what, and when
2. Debugging information when balances look wrong
3. Ability to reconstruct the order of operations

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Catalog
    GROUP_CREATED = "group_created"
    
    # Registry
    USER_ADDED = "user_added"
    USER_REMOVED = "user_removed"
    
    # Transaction log
    TRANSACTION_POSTED = "transaction_posted"
    TRANSACTIONS_PURGED = "transactions_purged"
    
    # Rejections
    DUPLICATE_REJECTED = "duplicate_rejected"
    LOOKUP_FAILED = "lookup_failed"
    
    # Read-only queries
    QUERY_EXECUTED = "query_executed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.
    
    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """
    
    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    
    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    
    # Context - what is this about?
    group_name: Optional[str] = Field(
        default=None,
        description="Group the event happened in"
    )
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'group', 'user', 'transaction')"
    )
    entity_name: Optional[str] = Field(
        default=None,
        description="Name of the group or member the event relates to"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity, for entities that have one"
    )
    
    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., a removal and its purge)"
    )
    
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "group_name": self.group_name,
            "entity_type": self.entity_type,
            "entity_name": self.entity_name,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.group_created("trip")
        event = AuditEventBuilder.transaction_posted("trip", txn, "$10.00")
    """
    
    @staticmethod
    def group_created(group_name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GROUP_CREATED,
            group_name=group_name,
            entity_type="group",
            entity_name=group_name,
            description=f"Group created: {group_name}",
        )
    
    @staticmethod
    def duplicate_rejected(
        entity_type: str,
        name: str,
        group_name: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DUPLICATE_REJECTED,
            severity=AuditSeverity.WARNING,
            group_name=group_name,
            entity_type=entity_type,
            entity_name=name,
            description=f"Duplicate {entity_type} rejected: {name}",
        )
    
    @staticmethod
    def user_added(group_name: str, user_name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_ADDED,
            group_name=group_name,
            entity_type="user",
            entity_name=user_name,
            description=f"User {user_name} joined {group_name}",
        )
    
    @staticmethod
    def user_removed(
        group_name: str,
        user_name: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_REMOVED,
            group_name=group_name,
            entity_type="user",
            entity_name=user_name,
            correlation_id=correlation_id,
            description=f"User {user_name} removed from {group_name}",
        )
    
    @staticmethod
    def transactions_purged(
        group_name: str,
        user_name: str,
        purged_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_PURGED,
            group_name=group_name,
            entity_type="user",
            entity_name=user_name,
            correlation_id=correlation_id,
            description=f"Purged {purged_count} transactions of {user_name}",
            details={
                "purged_count": purged_count,
            },
        )
    
    @staticmethod
    def transaction_posted(
        group_name: str,
        transaction_id: UUID,
        user_name: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_POSTED,
            group_name=group_name,
            entity_type="transaction",
            entity_name=user_name,
            entity_id=transaction_id,
            description=f"Transaction posted: {user_name} {amount}",
            details={
                "user_name": user_name,
                "amount": amount,
            },
        )
    
    @staticmethod
    def lookup_failed(
        entity_type: str,
        name: str,
        group_name: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOOKUP_FAILED,
            severity=AuditSeverity.WARNING,
            group_name=group_name,
            entity_type=entity_type,
            entity_name=name,
            description=f"No such {entity_type}: {name}",
        )
    
    @staticmethod
    def query_executed(
        group_name: str,
        query_type: str,
        result_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_EXECUTED,
            severity=AuditSeverity.DEBUG,
            group_name=group_name,
            entity_type="query",
            description=f"Query executed: {query_type} returned {result_count} results",
            details={
                "query_type": query_type,
                "result_count": result_count,
            },
        )
