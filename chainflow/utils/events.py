"""
Domain Event Bus — Observer Pattern

Services publish events after a successful commit; handlers subscribed at
startup log them and persist them to the audit_logs table.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from chainflow.utils.clock import utcnow
from chainflow.utils.logging import redact

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    entity_type: str
    entity_id: Optional[int]
    user_id: Optional[int] = None
    occurred_at: Any = field(default_factory=utcnow)

    action = "event"

    def payload(self) -> Dict[str, Any]:
        return {}


@dataclass
class EntityCreatedEvent(DomainEvent):
    action = "create"


@dataclass
class EntityUpdatedEvent(DomainEvent):
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None

    action = "update"

    def payload(self) -> Dict[str, Any]:
        return {"old_values": self.old_values, "new_values": self.new_values}


@dataclass
class EntityDeletedEvent(DomainEvent):
    action = "delete"


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    old_status: str = ""
    new_status: str = ""
    stock_restored: bool = False

    action = "status_change"

    def payload(self) -> Dict[str, Any]:
        return {
            "old_values": {"status": self.old_status},
            "new_values": {"status": self.new_status, "stock_restored": self.stock_restored},
        }


@dataclass
class StockAdjustedEvent(DomainEvent):
    old_quantity: int = 0
    new_quantity: int = 0
    reason: str = ""

    action = "stock_adjust"

    def payload(self) -> Dict[str, Any]:
        return {
            "old_values": {"quantity": self.old_quantity},
            "new_values": {"quantity": self.new_quantity, "reason": self.reason},
        }


Handler = Callable[[DomainEvent], None]


class EventBus:

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def publish(self, event: DomainEvent) -> None:
        for event_type, handlers in self._handlers.items():
            if not isinstance(event, event_type):
                continue
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    # A failing observer must not undo an already committed change
                    logger.exception(
                        "event_handler_failed handler=%s event=%s",
                        getattr(handler, "__name__", type(handler).__name__),
                        type(event).__name__,
                    )


class LoggingHandler:

    def __call__(self, event: DomainEvent) -> None:
        logger.info(
            "domain_event action=%s entity_type=%s entity_id=%s user_id=%s",
            event.action,
            event.entity_type,
            event.entity_id,
            event.user_id,
            extra={"event_payload": redact(event.payload())},
        )


class AuditLogHandler:

    def __init__(self, db_session_factory):
        self._session_factory = db_session_factory

    def __call__(self, event: DomainEvent) -> None:
        from chainflow.models.audit_log import AuditLog

        payload = json.loads(json.dumps(redact(event.payload()), default=str))
        db = self._session_factory()
        try:
            db.add(AuditLog(
                entity_type=event.entity_type,
                entity_id=event.entity_id,
                action=event.action,
                user_id=event.user_id,
                old_values=payload.get("old_values"),
                new_values=payload.get("new_values"),
                timestamp=event.occurred_at,
            ))
            db.commit()
        finally:
            db.close()


_event_bus = EventBus()


def get_event_bus() -> EventBus:
    return _event_bus


def configure_event_bus(db_session_factory=None) -> EventBus:
    _event_bus.clear()
    _event_bus.subscribe(DomainEvent, LoggingHandler())
    if db_session_factory is not None:
        _event_bus.subscribe(DomainEvent, AuditLogHandler(db_session_factory))
    return _event_bus
