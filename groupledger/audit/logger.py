"""
Audit Logger

DESIGN DECISION: Every mutation of the ledger is logged.
This provides:
1. Traceability of balance changes
2. Debugging capability

The audit logger:
- Is synchronous, like the rest of the ledger
- Gracefully handles failures (a broken trail never fails a ledger operation)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional, Union
from uuid import UUID, uuid4

import structlog

from groupledger.audit.trail import AuditTrailInterface
from groupledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Route stdlib logging (and so structlog) to stderr at ``level``."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("groupledger").setLevel(level)


class AuditLogger:
    """
    Central audit logging service.
    
    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit trail (for callers that want to inspect history)
    """
    
    def __init__(
        self,
        trail: Optional[AuditTrailInterface] = None,
    ):
        """
        Initialize audit logger.
        
        Args:
            trail: Where to record events.
                   If None, only logs locally.
        """
        self._trail = trail
        self._logger = structlog.get_logger("groupledger.audit")
    
    @property
    def trail(self) -> Optional[AuditTrailInterface]:
        return self._trail
    
    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.
        
        Always logs locally. Records to the trail if available.
        
        Returns True if the trail write succeeded (or no trail configured).
        """
        log_dict = event.to_log_dict()
        
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)
        
        if self._trail is not None:
            try:
                return self._trail.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_trail_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False
        
        return True
    
    def log_group_created(self, group_name: str) -> None:
        self.log(AuditEventBuilder.group_created(group_name))
    
    def log_duplicate_rejected(
        self,
        entity_type: str,
        name: str,
        group_name: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.duplicate_rejected(entity_type, name, group_name))
    
    def log_user_added(self, group_name: str, user_name: str) -> None:
        self.log(AuditEventBuilder.user_added(group_name, user_name))
    
    def log_user_removed(
        self,
        group_name: str,
        user_name: str,
        purged_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a removal and the purge of the member's transactions."""
        self.log(AuditEventBuilder.user_removed(group_name, user_name, correlation_id))
        self.log(
            AuditEventBuilder.transactions_purged(
                group_name, user_name, purged_count, correlation_id
            )
        )
    
    def log_transaction_posted(
        self,
        group_name: str,
        transaction_id: UUID,
        user_name: str,
        amount: str,
    ) -> None:
        self.log(
            AuditEventBuilder.transaction_posted(
                group_name, transaction_id, user_name, amount
            )
        )
    
    def log_lookup_failed(
        self,
        entity_type: str,
        name: str,
        group_name: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.lookup_failed(entity_type, name, group_name))
    
    def log_query_executed(
        self,
        group_name: str,
        query_type: str,
        result_count: int,
    ) -> None:
        self.log(AuditEventBuilder.query_executed(group_name, query_type, result_count))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.
    
    Use this at the start of an operation that emits several events
    (e.g., removing a member and purging their transactions).
    """
    return uuid4()
