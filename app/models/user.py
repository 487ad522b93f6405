from typing import Optional
from sqlmodel import Field
from app.models.base import BaseModel

NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
# INTEGER PK 범위 (PostgreSQL serial 기준)
USER_ID_MAX = 2**31 - 1


class User(BaseModel, table=True):
    """
    사용자 정보를 저장하는 테이블
    - 이메일은 유니크 제약으로 중복 불가
    - 비밀번호는 bcrypt 해시로만 저장
    """

    __tablename__ = "users"  # ✅ SQL 예약어 충돌 방지

    user_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="사용자 고유 ID",
        sa_column_kwargs={"autoincrement": True}
    )

    name: str = Field(
        max_length=NAME_MAX_LENGTH,
        nullable=False,
        index=True,
        description="사용자명 (표시용 이름)"
    )

    email: str = Field(
        max_length=EMAIL_MAX_LENGTH,
        nullable=False,
        description="이메일 (로그인용)",
        sa_column_kwargs={"unique": True}
    )

    password_hash: str = Field(
        max_length=255,
        nullable=False,
        description="bcrypt로 해시된 비밀번호"
    )

    def to_dict(self) -> dict:
        """
        비밀번호 해시를 제외한 공개 정보만 반환합니다.
        """
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
        }

    def __repr__(self) -> str:
        return f"<User(id={self.user_id}, name='{self.name}', email='{self.email}')>"
