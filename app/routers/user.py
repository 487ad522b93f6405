# routers/user.py
from typing import Annotated, Optional

from fastapi import Depends, Query, status

from app.schemas import (
    AuthResponse,
    ErrorResponse,
    StatusResponse,
    UserAuthRequest,
    UserCreateRequest,
    UserSearchResponse,
    UserUpdateRequest,
)
from app.services.user_service import UserService
from app.utils.dependencies import get_user_service
from app.utils.router_utils import get_router

# 라우터 생성
router = get_router("users")


@router.post(
    "",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
    summary="사용자 생성",
    description="새로운 사용자를 생성합니다 (회원가입).",
    responses={
        400: {"model": ErrorResponse, "description": "필수 필드 누락 또는 검증 실패"},
        409: {"model": ErrorResponse, "description": "이미 존재하는 이메일"},
        500: {"model": ErrorResponse, "description": "저장 중 DB 오류"},
    },
)
async def create_user(
    service: Annotated[UserService, Depends(get_user_service)],
    user_data: Optional[UserCreateRequest] = None,
):
    """
    새로운 사용자를 생성합니다.

    - **name**: 사용자명 (1-50자)
    - **email**: 이메일 주소 (유효한 이메일 형식)
    - **password**: 비밀번호 (bcrypt 해시로 저장)
    """
    return await service.create_user(user_data or UserCreateRequest())


@router.post(
    "/auth",
    response_model=AuthResponse,
    summary="사용자 인증",
    description="이메일과 비밀번호로 사용자를 인증합니다.",
    responses={
        400: {"model": ErrorResponse, "description": "이메일 또는 비밀번호 누락"},
        401: {"model": ErrorResponse, "description": "잘못된 인증 정보"},
        500: {"model": ErrorResponse, "description": "사용자 조회 중 DB 오류"},
    },
)
async def authenticate_user(
    service: Annotated[UserService, Depends(get_user_service)],
    credentials: Optional[UserAuthRequest] = None,
):
    return await service.authenticate(credentials or UserAuthRequest())


@router.get(
    "/search",
    response_model=UserSearchResponse,
    summary="사용자 검색",
    description="id, name, email 중 하나로 사용자를 조회합니다 (우선순위: id > name > email).",
    responses={
        400: {"model": ErrorResponse, "description": "검색 키 누락"},
        404: {"model": ErrorResponse, "description": "사용자를 찾을 수 없음"},
    },
)
async def search_user(
    service: Annotated[UserService, Depends(get_user_service)],
    user_id: Annotated[Optional[str], Query(alias="id", description="사용자 ID")] = None,
    name: Annotated[Optional[str], Query(description="사용자명")] = None,
    email: Annotated[Optional[str], Query(description="이메일 주소")] = None,
):
    return await service.search(user_id=user_id, name=name, email=email)


@router.put(
    "/{user_id}",
    response_model=StatusResponse,
    summary="사용자 정보 수정",
    description="특정 사용자의 정보를 부분 수정합니다.",
    responses={
        400: {"model": ErrorResponse, "description": "수정할 데이터 없음 또는 잘못된 값"},
        404: {"model": ErrorResponse, "description": "사용자를 찾을 수 없음"},
        409: {"model": ErrorResponse, "description": "이미 존재하는 이메일"},
        500: {"model": ErrorResponse, "description": "수정 중 DB 오류"},
    },
)
async def update_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
    update_data: Optional[UserUpdateRequest] = None,
):
    """
    특정 사용자의 정보를 수정합니다.

    - **user_id**: 수정할 사용자의 ID
    - **name**: 새로운 사용자명 (선택사항)
    - **email**: 새로운 이메일 주소 (선택사항)
    - **password**: 새로운 비밀번호 (선택사항)
    """
    return await service.update_user(user_id, update_data or UserUpdateRequest())


@router.delete(
    "/{user_id}",
    response_model=StatusResponse,
    summary="사용자 삭제",
    description="특정 사용자를 삭제합니다.",
    responses={
        404: {"model": ErrorResponse, "description": "사용자를 찾을 수 없음"},
        500: {"model": ErrorResponse, "description": "삭제 중 DB 오류"},
    },
)
async def delete_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
):
    return await service.delete_user(user_id)
