"""
In-process audit trail of trust-state changes.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

EVENT_INITIALIZED = "initialized"
EVENT_OWNERSHIP_TRANSFERRED = "ownership_transferred"
EVENT_SIGNATURE_KEY_ADDED = "signature_key_added"
EVENT_SIGNATURE_KEY_REMOVED = "signature_key_removed"
EVENT_SIGNATURE_REVOKED = "signature_revoked"


@dataclass
class AuditEvent:
    event_type: str
    actor: Optional[str]
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "actor": self.actor,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class AuditTrail:
    """Records one event per successful mutation and mirrors it to the log."""

    def __init__(self):
        self._events: List[AuditEvent] = []

    def record(self, event_type: str, actor: Optional[str], **details: Any) -> AuditEvent:
        event = AuditEvent(event_type=event_type, actor=actor, details=details)
        self._events.append(event)
        logger.info("AUDIT %s actor=%s %s", event_type, actor, details)
        return event

    def get_events(self, event_type: Optional[str] = None) -> List[AuditEvent]:
        """Get recorded events, optionally filtered by type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e.event_type == event_type]


__all__ = [
    "AuditEvent",
    "AuditTrail",
    "EVENT_INITIALIZED",
    "EVENT_OWNERSHIP_TRANSFERRED",
    "EVENT_SIGNATURE_KEY_ADDED",
    "EVENT_SIGNATURE_KEY_REMOVED",
    "EVENT_SIGNATURE_REVOKED",
]
