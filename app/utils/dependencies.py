# utils/dependencies.py
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.repositories.user_repository import UserRepository
from app.services.user_service import UserService
from app.utils.security import BcryptPasswordHasher
from app.utils.validators import UserValidator


def get_user_repository(db: AsyncSession = Depends(get_session)) -> UserRepository:
    """
    요청 단위 세션에 묶인 Repository 생성
    """
    return UserRepository(db)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    """
    사용자 서비스 의존성 주입 (FastAPI Depends용)
    저장소 / 검증기 / 해시 함수를 명시적으로 조립한다.
    """
    return UserService(
        user_repository=repository,
        validator=UserValidator(),
        hasher=BcryptPasswordHasher(),
    )
