from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from txn_categorizer.config import settings

# Descriptions end up in query parameters; keep SQL echo off outside development.
async_engine = create_async_engine(
    settings.database_url,
    echo=(settings.db_echo if settings.is_development else False),
    future=True,
)

AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)
