import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import ConstraintViolationError, StorageError
from app.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """
    사용자 데이터베이스 접근을 담당하는 Repository 클래스
    요청마다 생성되며 하나의 AsyncSession에 묶인다.
    """

    # find_one_by_field 로 조회 가능한 컬럼
    LOOKUP_FIELDS = {"user_id", "name", "email"}

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """
        ID로 사용자를 조회합니다.

        Returns:
            조회된 사용자 객체 또는 None
        """
        try:
            user = await self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"사용자 ID 조회 오류 (user_id={user_id}): {e}")
            raise StorageError(str(e)) from e

        if user is None:
            logger.debug(f"사용자 ID를 찾을 수 없음: {user_id}")
        return user

    async def find_one_by_field(self, field: str, value: Any) -> Optional[User]:
        """
        단일 컬럼 값으로 사용자 한 명을 조회합니다.
        여러 명이 일치하면 ID가 가장 작은 사용자를 반환합니다.

        Args:
            field: 컬럼명 (user_id, name, email)
            value: 비교할 값
        """
        if field not in self.LOOKUP_FIELDS:
            raise ValueError(f"Unsupported lookup field: {field}")

        column = getattr(User, field)
        try:
            result = await self.db.execute(
                select(User).where(column == value).order_by(User.user_id).limit(1)
            )
            user = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"사용자 조회 오류 ({field}={value}): {e}")
            raise StorageError(str(e)) from e

        if user is None:
            logger.debug(f"사용자를 찾을 수 없음: {field}={value}")
        return user

    async def persist(self, user: User) -> None:
        """새 엔티티를 세션에 등록합니다 (commit 전까지 반영되지 않음)."""
        self.db.add(user)

    async def remove(self, user: User) -> None:
        """엔티티 삭제를 세션에 등록합니다."""
        try:
            await self.db.delete(user)
        except SQLAlchemyError as e:
            logger.error(f"사용자 삭제 오류 (user_id={user.user_id}): {e}")
            raise StorageError(str(e)) from e

    async def commit(self) -> None:
        """
        변경 사항을 커밋합니다.
        실패 시 롤백 후 무결성 위반은 ConstraintViolationError, 나머지는 StorageError.
        """
        try:
            await self.db.commit()
        except IntegrityError as ie:
            await self.rollback()
            logger.warning(f"커밋 무결성 오류: {ie.orig}")
            raise ConstraintViolationError(str(ie.orig)) from ie
        except SQLAlchemyError as e:
            await self.rollback()
            logger.error(f"커밋 오류: {e}")
            raise StorageError(str(e)) from e

    async def rollback(self) -> None:
        await self.db.rollback()
