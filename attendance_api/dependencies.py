import logging
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.database import database

logger = logging.getLogger(__name__)


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    One session per request: committed when the route returns, rolled back
    when it raises (including the 4xx errors of the attendance handlers).
    """
    async with database.get_session() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.debug(f"Session rolled back after {type(e).__name__}: {e}")
            raise
