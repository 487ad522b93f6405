import bcrypt

from app.core.config import settings


def _truncate_password(password: str) -> bytes:
    """
    bcrypt는 72바이트까지만 처리하므로, 초과하면 UTF-8 문자 경계를 고려하여 자름
    Returns bytes for bcrypt
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= 72:
        return password_bytes

    # UTF-8 문자가 중간에 잘리지 않도록 문자 단위로 처리
    truncated = password
    while len(truncated.encode("utf-8")) > 72:
        truncated = truncated[:-1]
    return truncated.encode("utf-8")


def get_password_hash(password: str) -> str:
    """
    비밀번호를 bcrypt로 해시화합니다.
    """
    password_bytes = _truncate_password(password)
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """
    비밀번호를 검증합니다.
    저장된 값이 bcrypt 해시 형식이 아니면 False.
    """
    plain_bytes = _truncate_password(plain)
    hashed_bytes = hashed.encode("utf-8")
    try:
        return bcrypt.checkpw(plain_bytes, hashed_bytes)
    except ValueError:
        return False


class BcryptPasswordHasher:
    """
    PasswordHasher 프로토콜 구현체 (UserService에 주입)
    """

    def hash(self, password: str) -> str:
        return get_password_hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)
