"""
API 스키마 모듈

Request/Response 스키마들을 정의합니다.
API 데이터 형식을 정의합니다.
"""

from .user_schema import (AuthResponse, ErrorResponse, StatusResponse,
                          UserAuthRequest, UserCreateRequest, UserResponse,
                          UserSearchResponse, UserUpdateRequest)

__all__ = [
    "UserCreateRequest",
    "UserUpdateRequest",
    "UserAuthRequest",
    "UserResponse",
    "UserSearchResponse",
    "AuthResponse",
    "StatusResponse",
    "ErrorResponse",
]
