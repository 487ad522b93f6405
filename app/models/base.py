from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.types import TIMESTAMP
from sqlalchemy import func
from sqlmodel import SQLModel, Field
from pydantic import ConfigDict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """
    모든 테이블에 공통으로 포함되는 기본 필드:
    - created_at: 생성 시각 (UTC)
    - updated_at: 수정 시각 (UTC)
    """
    __abstract__ = True  # 이 클래스로 테이블이 만들어지지 않도록

    # Pydantic v2: orm_mode → from_attributes
    model_config = ConfigDict(from_attributes=True)

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={
            "nullable": False,
            "server_default": func.now(),
            "comment": "레코드 생성일시 (UTC)",
        },
    )

    updated_at: Optional[datetime] = Field(
        default=None,
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={
            "nullable": True,
            "server_default": func.now(),
            "onupdate": func.now(),
            "comment": "레코드 수정일시 (UTC)",
        },
    )
