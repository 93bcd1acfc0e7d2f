"""
SQLAlchemy-backed entity store
"""
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kitchen_ops.database import get_db
from kitchen_ops.models import (
    MenuItem, Ingredient, CriticalControlPoint, Hazard, HACCPPlan,
    Asset, OperationReport, Sale, ChecklistMaster,
)
from kitchen_ops.store.entity_store import (
    EntityStore, Record, NEWEST_FIRST, parse_sort,
    EntityStoreError, UnknownEntityError, InvalidFieldError, RecordNotFoundError,
)

ENTITY_MODELS = {
    "MenuItem": MenuItem,
    "Ingredient": Ingredient,
    "CriticalControlPoint": CriticalControlPoint,
    "Hazard": Hazard,
    "Asset": Asset,
    "HACCPPlan": HACCPPlan,
    "OperationReport": OperationReport,
    "Sale": Sale,
    "ChecklistMaster": ChecklistMaster,
}


def _store_error(error: SQLAlchemyError) -> EntityStoreError:
    """Driver-level message only; the SQL text and bound parameters stay in the logs"""
    return EntityStoreError(str(getattr(error, "orig", None) or error))


class SqlAlchemyEntityStore(EntityStore):
    """Maps entity names onto ORM models; commits after every write"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _model(self, entity: str):
        model = ENTITY_MODELS.get(entity)
        if model is None:
            raise UnknownEntityError(entity)
        return model

    def _check_fields(self, entity: str, model, names) -> None:
        unknown = set(names) - model.field_names()
        if unknown:
            raise InvalidFieldError(entity, unknown)

    async def list(
        self,
        entity: str,
        sort: Optional[str] = NEWEST_FIRST,
        limit: Optional[int] = None,
    ) -> List[Record]:
        return await self.filter(entity, {}, sort=sort, limit=limit)

    async def filter(
        self,
        entity: str,
        query: Dict[str, Any],
        sort: Optional[str] = NEWEST_FIRST,
        limit: Optional[int] = None,
    ) -> List[Record]:
        model = self._model(entity)
        sort_field, descending = parse_sort(sort)
        self._check_fields(entity, model, list(query) + ([sort_field] if sort_field else []))

        stmt = select(model)
        for field, value in query.items():
            stmt = stmt.where(getattr(model, field) == value)
        if sort_field:
            column = getattr(model, sort_field)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise _store_error(e) from e
        return [row.to_dict() for row in result.scalars().all()]

    async def get(self, entity: str, record_id: str) -> Optional[Record]:
        model = self._model(entity)
        obj = await self.session.get(model, record_id)
        return obj.to_dict() if obj else None

    async def create(self, entity: str, fields: Dict[str, Any]) -> Record:
        model = self._model(entity)
        self._check_fields(entity, model, fields)

        obj = model(**fields)
        self.session.add(obj)
        await self._commit()
        await self.session.refresh(obj)
        return obj.to_dict()

    async def update(self, entity: str, record_id: str, fields: Dict[str, Any]) -> Record:
        model = self._model(entity)
        self._check_fields(entity, model, fields)

        obj = await self.session.get(model, record_id)
        if obj is None:
            raise RecordNotFoundError(entity, record_id)
        for field, value in fields.items():
            setattr(obj, field, value)
        await self._commit()
        await self.session.refresh(obj)
        return obj.to_dict()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise _store_error(e) from e
        except Exception:
            await self.session.rollback()
            raise


async def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
    """Dependency for getting the request-scoped entity store"""
    return SqlAlchemyEntityStore(db)
