from abc import ABC
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
from sqlalchemy.orm import Session
from pydantic import BaseModel

T = TypeVar("T")
SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseRepository(Generic[T, SchemaType], ABC):
    """Base repository; public methods return Pydantic schemas, never ORM rows."""

    def __init__(
        self, model_class: Type[T], schema_class: Type[SchemaType], db: Session
    ):
        self.model_class = model_class
        self.schema_class = schema_class
        self.db = db

    def _to_schema(self, model_instance: Any) -> Optional[SchemaType]:
        if model_instance is None:
            return None
        return self.schema_class.model_validate(model_instance)

    def _to_schemas(self, model_instances: List[Any]) -> List[SchemaType]:
        results = []
        for instance in model_instances:
            schema_instance = self._to_schema(instance)
            if schema_instance is not None:
                results.append(schema_instance)
        return results

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        if filters:
            for key, value in filters.items():
                if hasattr(self.model_class, key):
                    query = query.filter(getattr(self.model_class, key) == value)
        return query

    def find_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[SchemaType]:
        query = self._apply_filters(self.db.query(self.model_class), filters)

        if order_by and hasattr(self.model_class, order_by):
            query = query.order_by(getattr(self.model_class, order_by))

        if offset:
            query = query.offset(offset)

        if limit:
            query = query.limit(limit)

        return self._to_schemas(query.all())

    def create(self, commit: bool = True, **kwargs) -> Optional[SchemaType]:
        """Insert a row. Integrity errors are re-raised after rollback."""
        instance = self.model_class(**kwargs)
        self.db.add(instance)
        try:
            self.db.flush()
            self.db.refresh(instance)
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self._to_schema(instance)

    def update(
        self, instance_id: Any, commit: bool = True, **kwargs
    ) -> Optional[SchemaType]:
        instance = (
            self.db.query(self.model_class)
            .filter(getattr(self.model_class, "id") == instance_id)
            .first()
        )

        if not instance:
            return None

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        self.db.add(instance)
        try:
            self.db.flush()
            self.db.refresh(instance)
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self._to_schema(instance)
