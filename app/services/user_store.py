import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api.schemas.user import UserRecord
from app.core.database import create_session_factory
from app.core.logger import get_logger
from app.exceptions.exceptions import StoreException
from app.models.base import Base
from app.models.user import User

logger = get_logger(name="user_store")

T = TypeVar("T")


class UserStore:
    """Durable store adapter for user records.

    Every call runs in its own session taken from the engine's pool and is
    bounded by ``timeout_seconds``. Driver errors and timeouts surface as
    ``StoreException``.
    """

    def __init__(self, engine: AsyncEngine, timeout_seconds: float = 5.0):
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        self.timeout = timeout_seconds

    async def _run(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except (SQLAlchemyError, asyncio.TimeoutError) as exc:
            logger.error(f"Store operation {operation} failed: {exc!r}")
            raise StoreException(operation, exc) from exc

    async def create_tables(self) -> None:
        """Create the users table if it does not exist yet."""

        async def _create():
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        await self._run("create_tables", _create())
        logger.info("Users table is ready")

    async def query_all_users(self) -> list[UserRecord]:
        # No ORDER BY: rows come back in the store's natural order
        async def _query():
            async with self.session_factory() as session:
                result = await session.execute(select(User))
                return [UserRecord.model_validate(user) for user in result.scalars()]

        return await self._run("query_all_users", _query())

    async def insert_user(self, username: str, email: str) -> None:
        async def _insert():
            async with self.session_factory() as session:
                session.add(User(username=username, email=email))
                await session.commit()

        await self._run("insert_user", _insert())

    async def update_user_email(self, username: str, email: str) -> int:
        async def _update():
            async with self.session_factory() as session:
                result = await session.execute(
                    update(User).where(User.username == username).values(email=email)
                )
                await session.commit()
                return result.rowcount

        return await self._run("update_user_email", _update())

    async def delete_user(self, username: str) -> int:
        async def _delete():
            async with self.session_factory() as session:
                result = await session.execute(
                    delete(User).where(User.username == username)
                )
                await session.commit()
                return result.rowcount

        return await self._run("delete_user", _delete())

    async def ping(self) -> None:
        async def _ping():
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        await self._run("ping", _ping())

    async def close(self) -> None:
        await self.engine.dispose()
