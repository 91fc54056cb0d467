from decimal import Decimal

from chainflow.models.audit_log import AuditLog
from chainflow.utils.events import (
    AuditLogHandler,
    EntityUpdatedEvent,
    EventBus,
    StockAdjustedEvent,
)


def test_bus_delivers_to_matching_subscribers() -> None:
    bus = EventBus()
    received = []
    bus.subscribe(StockAdjustedEvent, received.append)

    bus.publish(StockAdjustedEvent(entity_type="inventory", entity_id=1, old_quantity=5, new_quantity=7))
    bus.publish(EntityUpdatedEvent(entity_type="inventory", entity_id=1))

    assert len(received) == 1
    assert received[0].new_quantity == 7


def test_failing_handler_does_not_propagate() -> None:
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EntityUpdatedEvent, broken)
    bus.subscribe(EntityUpdatedEvent, received.append)

    bus.publish(EntityUpdatedEvent(entity_type="supplier", entity_id=2))

    assert len(received) == 1


def test_audit_handler_persists_json_safe_redacted_values(db, session_factory, admin_user) -> None:
    handler = AuditLogHandler(session_factory)

    handler(EntityUpdatedEvent(
        entity_type="inventory",
        entity_id=3,
        user_id=admin_user.id,
        old_values={"unit_cost": Decimal("2.50")},
        new_values={"unit_cost": Decimal("3.00"), "password": "hunter2"},
    ))

    row = db.query(AuditLog).one()
    assert row.action == "update"
    assert row.old_values == {"unit_cost": "2.50"}
    assert row.new_values == {"unit_cost": "3.00", "password": "[REDACTED]"}
