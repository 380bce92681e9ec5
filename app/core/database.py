from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from contextlib import asynccontextmanager
from fastapi import Request

Base = declarative_base()

class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(self, url: str, echo: bool = False):
        engine_options = {}
        if not url.startswith("sqlite"):
            engine_options.update(
                pool_size=20,
                max_overflow=30,
                pool_timeout=30,
                pool_pre_ping=True,  # Enable connection health checks
                pool_recycle=1800,  # Recycle connections after 30 minutes
            )
        self.url = url
        self.engine = create_async_engine(url, echo=echo, future=True, **engine_options)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False  # Prevent expired object issues
        )

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self):
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self):
        session = self.SessionLocal()
        try:
            yield session
        finally:
            await session.close()

def get_database(request: Request) -> Database:
    return request.app.state.db

async def get_db(request: Request):
    async with get_database(request).session() as session:
        yield session
