"""Audit logging package."""

from groupledger.audit.logger import (
    AuditLogger,
    configure_logging,
    create_correlation_id,
)
from groupledger.audit.trail import AuditTrailInterface, InMemoryAuditTrail

__all__ = [
    "AuditLogger",
    "AuditTrailInterface",
    "InMemoryAuditTrail",
    "configure_logging",
    "create_correlation_id",
]
