import logging
from typing import Optional

from app.core.exceptions import (ConstraintViolationError, DuplicateEmailError,
                                 InvalidCredentialsError, LookupFailureError,
                                 MissingCredentialsError, MissingFieldError,
                                 NoFieldsProvidedError, NoKeyProvidedError,
                                 NotFoundError, PersistenceFailureError,
                                 StorageError, ValidationFailedError)
from app.models.user import USER_ID_MAX, User
from app.schemas import (AuthResponse, StatusResponse, UserAuthRequest,
                         UserCreateRequest, UserResponse, UserSearchResponse,
                         UserUpdateRequest)
from app.services.protocols import PasswordHasher, UserRepository, UserValidator
from app.utils.validators import (validate_email_field, validate_name,
                                  validate_password)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "password")


class UserService:
    """
    사용자 관련 비즈니스 로직을 담당하는 Service 클래스

    저장소 / 검증기 / 해시 함수는 생성 시 명시적으로 주입받는다.
    실패는 app.core.exceptions 의 UserServiceError 하위 예외로 던진다.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        validator: UserValidator,
        hasher: PasswordHasher,
    ):
        self.user_repository = user_repository
        self.validator = validator
        self.hasher = hasher

    async def create_user(self, user_data: UserCreateRequest) -> StatusResponse:
        """
        새로운 사용자를 생성합니다.

        Args:
            user_data: 사용자 생성 요청 데이터 (name, email, password)

        Raises:
            MissingFieldError: 필수 필드 누락
            ValidationFailedError: 필드 검증 실패 (모든 메시지 포함)
            DuplicateEmailError: 커밋 시 이메일 유니크 제약 위반
            PersistenceFailureError: 그 밖의 DB 오류
        """
        for field in REQUIRED_FIELDS:
            if getattr(user_data, field) is None:
                logger.warning(f"사용자 생성 필수 필드 누락: {field}")
                raise MissingFieldError(field)

        user = User(name=user_data.name, email=user_data.email, password_hash="")

        errors = self.validator.validate(user) + validate_password(user_data.password)
        if errors:
            logger.warning(f"사용자 생성 검증 실패: {errors}")
            raise ValidationFailedError(errors)

        # 평문 비밀번호는 저장하지 않음
        user.password_hash = self.hasher.hash(user_data.password)

        # 사전 중복 체크 없이 DB 유니크 제약에 맡김
        try:
            await self.user_repository.persist(user)
            await self.user_repository.commit()
        except ConstraintViolationError:
            logger.warning(f"이메일 중복 생성 시도: {user_data.email}")
            raise DuplicateEmailError()
        except StorageError as e:
            logger.error(f"사용자 생성 오류: {e}")
            raise PersistenceFailureError("Error while saving the user.") from e

        logger.info(f"사용자 생성 완료: id={user.user_id}")
        return StatusResponse(status="User created successfully.")

    async def update_user(
        self, user_id: int, update_data: UserUpdateRequest
    ) -> StatusResponse:
        """
        사용자 정보를 부분 수정합니다.
        name → email → password 순으로 검사하고 첫 번째 실패에서 중단합니다.
        """
        user = await self._find_by_id(user_id)
        if not user:
            raise NotFoundError()

        update_dict = update_data.model_dump(exclude_none=True)
        if not update_dict:
            raise NoFieldsProvidedError()

        changes = {}

        if "name" in update_dict:
            errors = validate_name(update_dict["name"])
            if errors:
                raise ValidationFailedError(errors, message=errors[0])
            changes["name"] = update_dict["name"]

        if "email" in update_dict:
            email = update_dict["email"]
            errors = validate_email_field(email)
            if errors:
                raise ValidationFailedError(errors, message=errors[0])

            # check-then-write: 동시 요청 간 경쟁은 커밋 시 유니크 제약이 막는다
            existing_user = await self._find_one_by_field("email", email)
            if existing_user and existing_user.user_id != user_id:
                logger.warning(f"이메일 중복 수정 시도: user_id={user_id}")
                raise DuplicateEmailError()
            changes["email"] = email

        if "password" in update_dict:
            errors = validate_password(update_dict["password"])
            if errors:
                raise ValidationFailedError(errors, message=errors[0])
            changes["password_hash"] = self.hasher.hash(update_dict["password"])

        for key, value in changes.items():
            setattr(user, key, value)

        try:
            await self.user_repository.commit()
        except ConstraintViolationError:
            raise DuplicateEmailError()
        except StorageError as e:
            logger.error(f"사용자 수정 오류 (user_id={user_id}): {e}")
            raise PersistenceFailureError("Error while updating the user.") from e

        logger.info(f"사용자 정보 수정 완료: id={user_id}, fields={sorted(update_dict)}")
        return StatusResponse(status="User updated successfully.")

    async def delete_user(self, user_id: int) -> StatusResponse:
        """
        사용자를 영구 삭제합니다.
        """
        user = await self._find_by_id(user_id)
        if not user:
            raise NotFoundError()

        try:
            await self.user_repository.remove(user)
            await self.user_repository.commit()
        except StorageError as e:
            logger.error(f"사용자 삭제 오류 (user_id={user_id}): {e}")
            raise PersistenceFailureError("Error while deleting the user.") from e

        logger.info(f"사용자 삭제 완료: id={user_id}")
        return StatusResponse(status="User deleted successfully.")

    async def authenticate(self, credentials: UserAuthRequest) -> AuthResponse:
        """
        이메일/비밀번호로 사용자를 인증합니다.
        사용자 없음과 비밀번호 불일치는 같은 InvalidCredentialsError.
        """
        if credentials.email is None or credentials.password is None:
            raise MissingCredentialsError()

        user = await self._find_one_by_field("email", credentials.email)

        if not user or not self.hasher.verify(credentials.password, user.password_hash):
            logger.warning("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        logger.info(f"사용자 인증 성공: id={user.user_id}")
        return AuthResponse(
            status="User authenticated.",
            user=UserResponse.model_validate(user.to_dict()),
        )

    async def search(
        self,
        user_id: Optional[str] = None,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> UserSearchResponse:
        """
        id → name → email 우선순위로 처음 주어진 키 하나로만 조회합니다.
        """
        if user_id:
            # 정수가 아닌 id는 어떤 사용자와도 일치할 수 없음
            try:
                lookup_id = int(user_id)
            except ValueError:
                lookup_id = None
            user = await self._find_by_id(lookup_id) if lookup_id is not None else None
            if not user:
                raise NotFoundError("User with this id not found.")
        elif name:
            user = await self._find_one_by_field("name", name)
            if not user:
                raise NotFoundError("User with this name not found.")
        elif email:
            user = await self._find_one_by_field("email", email)
            if not user:
                raise NotFoundError("User with this email not found.")
        else:
            raise NoKeyProvidedError()

        return UserSearchResponse(status="User found.", **user.to_dict())

    async def _find_by_id(self, user_id: int) -> Optional[User]:
        # 컬럼 범위 밖의 id는 존재할 수 없으므로 DB 조회 없이 None
        if not 1 <= user_id <= USER_ID_MAX:
            return None
        try:
            return await self.user_repository.find_by_id(user_id)
        except StorageError as e:
            raise LookupFailureError() from e

    async def _find_one_by_field(self, field: str, value: str) -> Optional[User]:
        try:
            return await self.user_repository.find_one_by_field(field, value)
        except StorageError as e:
            raise LookupFailureError() from e
