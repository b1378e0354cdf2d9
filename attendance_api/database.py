import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from attendance_api.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    def __init__(self):
        self.engine = None
        self.async_session = None
        self.is_connected = False

    async def connect(self, url: Optional[str] = None):
        """Create the async engine and session factory"""
        connection_string = url or settings.database_url
        try:
            self.engine = create_async_engine(
                connection_string,
                echo=settings.SQL_ECHO,
                pool_pre_ping=True,
                poolclass=NullPool
            )

            self.async_session = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False
            )

            self.is_connected = True
            logger.info(f"Connected to database: {self.engine.url.render_as_string(hide_password=True)}")
            return True

        except Exception as e:
            logger.error(f"Error connecting to database: {e}")
            self.is_connected = False
            raise

    async def disconnect(self):
        """Dispose the engine"""
        if self.engine:
            await self.engine.dispose()
            self.is_connected = False
            logger.info("Database connection closed")

    def get_session(self) -> AsyncSession:
        """Get async database session"""
        if not self.is_connected:
            raise RuntimeError("Database is not connected. Call connect() first.")
        return self.async_session()

    async def create_tables(self):
        """Create all tables defined in Base metadata"""
        # models must be imported so their tables are registered on Base.metadata
        from attendance_api.models import attendance, reference, student  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Tables created successfully")
        except Exception as e:
            logger.error(f"Error creating tables: {e}")
            raise

    async def check_connection(self) -> bool:
        if not self.is_connected:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False


# Create global database instance
database = Database()
