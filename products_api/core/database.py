from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from products_api.core.config import settings
from products_api.core.exceptions import ProductAPIError
import logging

logger = logging.getLogger(__name__)


def build_engine(database_url: str = None) -> AsyncEngine:
    url = database_url or settings.database_url
    options = {"echo": settings.log_level == "DEBUG", "future": True}
    # Pool sizing only applies to server databases
    if not url.startswith("sqlite"):
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return create_async_engine(url, **options)


engine: AsyncEngine = build_engine()

async_session_maker = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_session() -> AsyncSession:
    """FastAPI dependency for getting database session"""
    async with async_session_maker() as session:
        try:
            yield session
        except ProductAPIError:
            # Logged where raised; the DAO rolls back its own failures
            raise
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {type(e).__name__}: {e}")
            raise
        finally:
            await session.close()


async def create_db_and_tables():
    # Registers the products table on SQLModel.metadata
    import products_api.models  # noqa: F401

    logger.info("Creating database tables")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db():
    await engine.dispose()
