import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession, async_sessionmaker,
                                    create_async_engine)
from sqlmodel import SQLModel

from app.core.config import settings
from app.models import User  # noqa: F401  (metadata 등록)

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.SQL_ECHO,  # ORM 쿼리 로깅
)

async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """비동기 DB 세션 생성 - FastAPI Dependency Injection용"""
    session = async_session()
    try:
        yield session
    finally:
        # 세션 종료 시 안전하게 처리
        try:
            await session.close()
        except Exception as e:
            # 이미 닫혔거나 다른 작업 중인 경우 무시
            logger.debug(f"Session close warning (safe to ignore): {e}")


async def init_db(bind: AsyncEngine = engine):
    """모든 SQLModel 테이블 생성 (마이그레이션 아님)"""
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("DB 테이블 생성 완료")
