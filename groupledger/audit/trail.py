"""
Audit Trail Storage

DESIGN DECISION: We define an abstract interface for where audit events
go after they are logged locally. The ledger keeps no state across
restarts, so the only implementation is an in-memory, bounded trail.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Optional

from groupledger.models.audit import AuditEvent, AuditEventType


class AuditTrailInterface(ABC):
    """
    Abstract interface for audit event storage.
    
    Audit trails are append-only - we never modify events.
    """
    
    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the trail.
        
        Returns:
            True if recorded successfully
        """
        pass
    
    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
        event_type: Optional[AuditEventType] = None,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.
        
        Args:
            limit: Maximum number of events to return
            event_type: Only return events of this type
            
        Returns:
            List of recent events (newest first)
        """
        pass
    
    @abstractmethod
    def get_events_for(
        self,
        group_name: str,
        entity_name: Optional[str] = None,
    ) -> list[AuditEvent]:
        """
        Get all events for a group, or for one member of it.
        
        Returns:
            List of events in chronological order
        """
        pass


class InMemoryAuditTrail(AuditTrailInterface):
    """Keeps the newest ``max_events`` events; older ones fall off."""
    
    def __init__(self, max_events: int = 1000):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
    
    def __len__(self) -> int:
        return len(self._events)
    
    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True
    
    def get_recent_events(
        self,
        limit: int = 100,
        event_type: Optional[AuditEventType] = None,
    ) -> list[AuditEvent]:
        events = []
        for event in reversed(self._events):
            if len(events) >= limit:
                break
            if event_type is None or event.event_type == event_type:
                events.append(event)
        return events
    
    def get_events_for(
        self,
        group_name: str,
        entity_name: Optional[str] = None,
    ) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.group_name == group_name
            and (entity_name is None or event.entity_name == entity_name)
        ]
