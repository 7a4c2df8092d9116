from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


class DatabaseClient:
    """
    Client for the frontend's persistence layer.

    Only the startup connectivity check lives here. The engine is created on
    first use so constructing a client never touches the network.
    """

    def __init__(self, database_url: str, database_name: str = ""):
        self.database_url = database_url
        self.database_name = database_name
        self._engine: Optional[AsyncEngine] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(self.database_url, pool_pre_ping=True)
        return self._engine

    async def db_connection_test(self) -> str:
        """
        Open one connection and run ``SELECT 1``.

        The engine is disposed afterwards: its pooled connections belong to the
        event loop the check ran on.
        """
        if not self.database_url:
            raise ValueError("database url is not configured")

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        finally:
            await self.close()

        return f"database {self.database_name or '<default>'} reachable"

    async def close(self):
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
