"""
사용자 API 에러 정의

- StorageError / ConstraintViolationError: Repository 계층에서 발생 (DB 오류)
- UserServiceError 하위 클래스: Service 계층에서 발생, HTTP 응답으로 변환됨
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class StorageError(Exception):
    """DB 작업 실패 (커밋, 조회, 삭제 등)"""


class ConstraintViolationError(StorageError):
    """유니크 제약 조건 등 무결성 위반"""


class UserServiceError(Exception):
    """
    서비스 계층 에러의 기본 클래스
    status_code / message 는 JSON 응답의 상태 코드와 status 필드가 된다.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal error."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.message}


class MissingFieldError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Required field is missing."

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.message, "field": self.field}


class MissingCredentialsError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email and password are required."


class NoFieldsProvidedError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "No data provided for update."


class NoKeyProvidedError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "One of id, name or email is required."


class ValidationFailedError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation errors."

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.message, "errors": self.errors}


class DuplicateEmailError(UserServiceError):
    status_code = status.HTTP_409_CONFLICT
    message = "User with this email already exists."


class NotFoundError(UserServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found."


class InvalidCredentialsError(UserServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials."


class PersistenceFailureError(UserServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Error while saving the user."


class LookupFailureError(UserServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Error while looking up the user."
