from chainflow.models.user import User
from chainflow.models.supplier import Supplier
from chainflow.models.inventory import InventoryItem
from chainflow.models.order import Order, OrderItem, OrderHistory, OrderSequence
from chainflow.models.audit_log import AuditLog

__all__ = [
    "User",
    "Supplier",
    "InventoryItem",
    "Order",
    "OrderItem",
    "OrderHistory",
    "OrderSequence",
    "AuditLog",
]
