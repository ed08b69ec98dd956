"""
Database session management for async SQLAlchemy operations.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from hadith_categorizer.config import settings


# Create async engine
engine = create_async_engine(
    settings.async_database_url,
    echo=False,  # Set to True for SQL query logging during development
    pool_size=5,
    max_overflow=5,
    pool_pre_ping=True,  # Verify connections before using
)

# Create async session factory
AsyncSessionFactory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)
