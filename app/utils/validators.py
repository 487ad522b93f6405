"""
사용자 필드 검증 유틸리티

각 함수는 위반 메시지 리스트를 반환합니다 (빈 리스트 = 통과).
"""
from typing import List

from email_validator import EmailNotValidError, validate_email

from app.models.user import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, User


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_email(email: str) -> bool:
    """이메일 문법만 검사합니다 (DNS 조회 없음)."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_name(name: str | None) -> List[str]:
    if is_blank(name):
        return ["Name cannot be empty."]
    if len(name) > NAME_MAX_LENGTH:
        return [f"Name must be at most {NAME_MAX_LENGTH} characters."]
    return []


def validate_email_field(email: str | None) -> List[str]:
    if is_blank(email):
        return ["Email cannot be empty."]
    errors = []
    if not is_valid_email(email):
        errors.append("Invalid email format.")
    if len(email) > EMAIL_MAX_LENGTH:
        errors.append(f"Email must be at most {EMAIL_MAX_LENGTH} characters.")
    return errors


def validate_password(password: str | None) -> List[str]:
    if is_blank(password):
        return ["Password cannot be empty."]
    return []


class UserValidator:
    """
    UserValidator 프로토콜 구현체
    엔티티 단위 검증: 모든 위반 메시지를 모아서 반환
    (비밀번호는 해시 전 평문 단계에서 validate_password로 검사)
    """

    def validate(self, user: User) -> List[str]:
        errors: List[str] = []
        errors.extend(validate_name(user.name))
        errors.extend(validate_email_field(user.email))
        return errors
