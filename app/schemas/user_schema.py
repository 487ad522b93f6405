from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreateRequest(BaseModel):
    """
    사용자 생성 요청 스키마
    필드 누락은 서비스에서 MissingField(400)로 처리하므로 모두 Optional
    """
    name: Optional[str] = Field(None, description="사용자명")
    email: Optional[str] = Field(None, description="이메일 주소")
    password: Optional[str] = Field(None, description="비밀번호")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ann",
                "email": "ann@example.org",
                "password": "secret"
            }
        }
    )


class UserUpdateRequest(BaseModel):
    """
    사용자 정보 수정 요청 스키마 (부분 수정)
    """
    name: Optional[str] = Field(None, description="새 사용자명")
    email: Optional[str] = Field(None, description="새 이메일 주소")
    password: Optional[str] = Field(None, description="새 비밀번호")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Anna",
                "email": "anna@example.org"
            }
        }
    )


class UserAuthRequest(BaseModel):
    """
    사용자 인증 요청 스키마
    """
    email: Optional[str] = Field(None, description="이메일 주소")
    password: Optional[str] = Field(None, description="비밀번호")


class UserResponse(BaseModel):
    """
    사용자 공개 정보 (비밀번호 해시 제외)
    """
    id: int = Field(..., description="사용자 ID")
    name: str = Field(..., description="사용자명")
    email: str = Field(..., description="이메일 주소")


class StatusResponse(BaseModel):
    status: str = Field(..., description="처리 결과 메시지")


class AuthResponse(StatusResponse):
    user: UserResponse


class UserSearchResponse(StatusResponse, UserResponse):
    pass


class ErrorResponse(BaseModel):
    """
    에러 응답 스키마
    """
    status: str = Field(..., description="에러 메시지")
    field: Optional[str] = Field(None, description="누락된 필드명")
    errors: Optional[List[str]] = Field(None, description="검증 오류 목록")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "User not found."
            }
        }
    )
