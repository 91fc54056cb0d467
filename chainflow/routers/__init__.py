# Routers package — Thin Controllers (SRP / DIP)
from chainflow.routers import (
    auth,
    health,
    inventory,
    orders,
    suppliers,
    analytics,
)

__all__ = [
    "auth",
    "health",
    "inventory",
    "orders",
    "suppliers",
    "analytics",
]
