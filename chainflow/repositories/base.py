"""
Base Repository — generic data access (Repository Pattern, GoF)

create/update/delete commit immediately. Multi-record units of work use
add()/flush() and leave the commit to the calling service.
"""
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query, Session

from chainflow.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        return self.db.get(self.model, entity_id)

    def get_for_update(self, entity_id: int) -> Optional[ModelType]:
        """Fetch a row with a write lock on dialects that support FOR UPDATE."""
        return (
            self.db.query(self.model)
            .filter(self.model.id == entity_id)
            .with_for_update(of=self.model)
            .populate_existing()
            .first()
        )

    def get_all(self) -> List[ModelType]:
        return self.db.query(self.model).all()

    def count(self) -> int:
        return self.db.query(self.model).count()

    def create(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj: ModelType, updates: Dict[str, Any]) -> ModelType:
        for key, value in updates.items():
            setattr(obj, key, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: ModelType) -> None:
        self.db.delete(obj)
        self.db.commit()

    def add(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        self.db.flush()
        return obj

    def paginate(
        self,
        query: Query,
        page: int,
        page_size: int,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        sortable: Tuple[str, ...] = ("created_at",),
    ) -> Tuple[List[ModelType], int]:
        total = query.order_by(None).count()
        column = getattr(self.model, sort_by if sort_by in sortable else "created_at")
        direction = asc if sort_order == "asc" else desc
        items = (
            query.order_by(direction(column), direction(self.model.id))
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return items, total
