from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base
from herero_dictionary.config import get_database_url

# PostgreSQL naming conventions
POSTGRES_INDEXES_NAMING_CONVENTION = {
    "ix": "%(column_0_label)s_idx",
    "uq": "%(table_name)s_%(column_0_name)s_key",
    "ck": "%(table_name)s_%(constraint_name)s_check",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
    "pk": "%(table_name)s_pkey",
}

metadata = MetaData(naming_convention=POSTGRES_INDEXES_NAMING_CONVENTION)

database_url = get_database_url()

engine = create_async_engine(
    database_url,
    echo=False,
    future=True,
    connect_args={
        "server_settings": {
            "timezone": "UTC"
        }
    } if "postgresql" in database_url else {}
)

# Note: For asyncpg, timezone is set via connect_args above

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

Base = declarative_base(metadata=metadata)


async def create_tables() -> None:
    """Create all tables registered on Base.metadata"""
    # Import models so they are registered with Base.metadata
    import herero_dictionary.words.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency to get async database session
async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
