# Repository Layer — Data Access (Repository Pattern, GoF)
from chainflow.repositories.base import BaseRepository
from chainflow.repositories.user_repository import UserRepository
from chainflow.repositories.supplier_repository import SupplierRepository
from chainflow.repositories.inventory_repository import InventoryRepository
from chainflow.repositories.order_repository import OrderRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SupplierRepository",
    "InventoryRepository",
    "OrderRepository",
]
