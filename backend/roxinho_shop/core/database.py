from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from roxinho_shop.core.config import settings

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_pool_size,
    pool_pre_ping=True,
    echo=settings.debug,
    connect_args={
        "server_settings": {"statement_timeout": str(settings.db_statement_timeout_ms)},
    },
)

# Catalogue rows are returned from routes after commit, so keep them loaded
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
