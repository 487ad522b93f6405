from __future__ import annotations
from typing import Any, Optional, Protocol

from app.models.user import User


class UserRepository(Protocol):
    """
    저장소 추상화. 구현체는 DB 오류를 StorageError /
    ConstraintViolationError 로 변환해서 던져야 한다.
    커밋 실패 시 롤백도 구현체가 직접 처리한다.
    """

    async def find_by_id(self, user_id: int) -> Optional[User]: ...

    async def find_one_by_field(self, field: str, value: Any) -> Optional[User]: ...

    async def persist(self, user: User) -> None: ...

    async def remove(self, user: User) -> None: ...

    async def commit(self) -> None: ...


class UserValidator(Protocol):
    def validate(self, user: User) -> list[str]: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...
