"""
Database engine, session factory and the declarative base for entity tables
"""
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from kitchen_ops.config import get_settings

settings = get_settings()

ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "sqlite:///": "sqlite+aiosqlite:///",
}

Base = declarative_base()


def async_url(url: str) -> str:
    """Swap a sync driver prefix for its async counterpart; other URLs pass through"""
    for prefix, replacement in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    url = async_url(url)
    options = {"echo": echo}
    # Pool sizing only applies to server databases
    if not url.startswith("sqlite"):
        options.update(pool_size=20, max_overflow=10)
    return create_async_engine(url, **options)


def session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
AsyncSessionLocal = session_factory(engine)


async def create_tables(bind: AsyncEngine = None) -> None:
    """Create every entity table on the given engine (defaults to the app engine)"""
    import kitchen_ops.models  # noqa: F401 - registers all entities on Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncSession:
    """Dependency for getting database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
