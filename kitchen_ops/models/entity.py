"""
Shared columns for all store-managed entities
"""
import uuid
from datetime import date, datetime
from typing import Any, Dict

from sqlalchemy import Column, String, DateTime, inspect


def new_entity_id() -> str:
    return uuid.uuid4().hex


class EntityMixin:
    """String id plus created/updated timestamps, as every entity record carries"""

    id = Column(String(32), primary_key=True, default=new_entity_id)
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_date = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def field_names(cls) -> set[str]:
        return {attr.key for attr in inspect(cls).column_attrs}

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for key in self.field_names():
            value = getattr(self, key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            data[key] = value
        return data
