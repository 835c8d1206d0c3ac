# doctor_agenda/core/db.py
from collections.abc import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from doctor_agenda.core.config import settings


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses (and so ON DELETE CASCADE) unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str, **kwargs) -> AsyncEngine:
    kwargs.setdefault("echo", settings.DB_ECHO)
    kwargs.setdefault("pool_pre_ping", True)
    eng = create_async_engine(url, **kwargs)
    if eng.dialect.name == "sqlite":
        event.listen(eng.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return eng


engine = make_engine(settings.async_database_url)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session


async def init_models(eng: AsyncEngine | None = None) -> None:
    """Create every table on ``eng`` (local bootstrap and tests; deployments use alembic)."""
    import doctor_agenda.models  # noqa: F401  populates Base.metadata

    async with (eng or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
