"""
Test fixtures - in-memory SQLite database, in-memory fake store, HTTP client
"""
import copy
from collections import defaultdict
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from kitchen_ops.database import Base, build_engine, create_tables, get_db, session_factory
from kitchen_ops.main import app
from kitchen_ops.models.entity import new_entity_id
from kitchen_ops.store.entity_store import (
    EntityStore, RecordNotFoundError, parse_sort,
    MENU_ITEM, INGREDIENT, CRITICAL_CONTROL_POINT, ASSET,
)
from kitchen_ops.store.sqlalchemy_store import SqlAlchemyEntityStore


class InMemoryEntityStore(EntityStore):
    """
    Dict-backed store with fault injection.

    fail(op, entity, record_id=None) makes matching calls raise; every call
    is recorded in .calls as (op, entity, detail).
    """

    def __init__(self):
        self.records = defaultdict(list)
        self.calls = []
        self._failures = {}
        self._clock = datetime(2026, 1, 1, 8, 0, 0)

    def fail(self, op, entity, record_id=None, error=None):
        self._failures[(op, entity, record_id)] = error or RuntimeError(f"{op} {entity} unavailable")

    def seed(self, entity, **fields):
        self._clock += timedelta(seconds=1)
        record = {"id": new_entity_id(), "created_date": self._clock, **fields}
        self.records[entity].append(record)
        return copy.deepcopy(record)

    @property
    def writes(self):
        return [c for c in self.calls if c[0] in ("create", "update")]

    def _check(self, op, entity, record_id=None):
        for key in ((op, entity, record_id), (op, entity, None)):
            if key in self._failures:
                raise self._failures[key]

    def _select(self, entity, query, sort, limit):
        rows = [r for r in self.records[entity] if all(r.get(k) == v for k, v in query.items())]
        field, descending = parse_sort(sort)
        if field:
            rows = sorted(rows, key=lambda r: r.get(field), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return copy.deepcopy(rows)

    async def list(self, entity, sort="-created_date", limit=None):
        self.calls.append(("list", entity, limit))
        self._check("list", entity)
        return self._select(entity, {}, sort, limit)

    async def filter(self, entity, query, sort="-created_date", limit=None):
        self.calls.append(("filter", entity, dict(query)))
        self._check("filter", entity)
        return self._select(entity, query, sort, limit)

    async def get(self, entity, record_id):
        self.calls.append(("get", entity, record_id))
        self._check("get", entity, record_id)
        rows = self._select(entity, {"id": record_id}, None, 1)
        return rows[0] if rows else None

    async def create(self, entity, fields):
        self.calls.append(("create", entity, dict(fields)))
        self._check("create", entity)
        return self.seed(entity, **fields)

    async def update(self, entity, record_id, fields):
        self.calls.append(("update", entity, record_id))
        self._check("update", entity, record_id)
        for record in self.records[entity]:
            if record["id"] == record_id:
                record.update(fields)
                return copy.deepcopy(record)
        raise RecordNotFoundError(entity, record_id)


@pytest.fixture()
def memory_store():
    return InMemoryEntityStore()


@pytest_asyncio.fixture()
async def db_session():
    """Create a fresh in-memory SQLite database for each test"""
    engine = build_engine("sqlite:///:memory:")

    await create_tables(engine)

    async with session_factory(engine)() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def store(db_session):
    return SqlAlchemyEntityStore(db_session)


@pytest_asyncio.fixture()
async def seed_data(store):
    """A small kitchen: 3 menu items, 2 CCPs (one temperature), 1 asset, 2 ingredients"""
    flour = await store.create(INGREDIENT, {"name": "Flour", "unit": "kg", "current_stock": 10})
    cheese = await store.create(INGREDIENT, {"name": "Mozzarella", "unit": "kg", "current_stock": 2})

    margherita = await store.create(MENU_ITEM, {
        "name": "Margherita",
        "price": 10.0,
        "cost": 3.0,
        "ingredients": [
            {"ingredient_id": flour["id"], "ingredient_name": "Flour", "quantity": 0.25, "unit": "kg"},
            {"ingredient_id": cheese["id"], "ingredient_name": "Mozzarella", "quantity": 0.15, "unit": "kg"},
        ],
    })
    garlic_bread = await store.create(MENU_ITEM, {
        "name": "Garlic Bread",
        "price": 5.0,
        "cost": 1.0,
        "ingredients": [
            {"ingredient_id": flour["id"], "ingredient_name": "Flour", "quantity": 0.1, "unit": "kg"},
        ],
    })
    salad = await store.create(MENU_ITEM, {"name": "Side Salad", "price": 4.0, "cost": 1.5})

    probe = await store.create(CRITICAL_CONTROL_POINT, {
        "name": "Hot holding",
        "stage": "holding",
        "monitoring_parameter": "Food temperature",
        "critical_limit": "63",
        "unit": "celsius",
        "check_frequency": "Every 2 hours",
        "monitoring_method": "Probe thermometer",
        "responsible_role": "Sous chef",
    })
    delivery = await store.create(CRITICAL_CONTROL_POINT, {
        "name": "Goods in",
        "stage": "delivery",
        "monitoring_parameter": "Packaging integrity",
        "critical_limit": "No damage",
        "unit": "visual",
        "check_frequency": "Every delivery",
        "monitoring_method": "Visual inspection",
        "responsible_role": "Receiver",
    })
    oven = await store.create(ASSET, {"name": "Pizza oven", "category": "oven"})

    return {
        "flour": flour,
        "cheese": cheese,
        "margherita": margherita,
        "garlic_bread": garlic_bread,
        "salad": salad,
        "ccps": [probe, delivery],
        "oven": oven,
    }


@pytest_asyncio.fixture()
async def client(db_session):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
