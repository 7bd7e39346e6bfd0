"""SQLAlchemy storage backend for RewardForge."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, delete, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .base import KeyValueStore


class Base(DeclarativeBase):
    pass


class KeyValueTable(Base):
    __tablename__ = "rewardforge_kv"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class AsyncSQLAlchemyStorage:
    """Async engine plus the stores built on it."""

    def __init__(self, dsn: str, *, echo: bool = False) -> None:
        self._engine = create_async_engine(dsn, echo=echo, future=True)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    async def init_models(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    def key_value_store(self) -> "AsyncSQLAlchemyKeyValueStore":
        return AsyncSQLAlchemyKeyValueStore(self._session_factory)


class AsyncSQLAlchemyKeyValueStore(KeyValueStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as session:
            row = await session.get(KeyValueTable, key)
            return row.value if row else None

    async def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        async with self._session_factory() as session:
            stmt = (
                update(KeyValueTable)
                .where(KeyValueTable.key == key)
                .values(value=value, updated_at=now)
            )
            result = await session.execute(stmt)
            if result.rowcount == 0:
                session.add(KeyValueTable(key=key, value=value, updated_at=now))
            await session.commit()

    async def delete(self, key: str) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(KeyValueTable).where(KeyValueTable.key == key))
            await session.commit()
