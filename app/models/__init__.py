"""
데이터 모델 모듈

SQLModel 테이블 모델을 정의합니다.
"""
from app.models.user import User

__all__ = ["User"]
