"""UserService 테스트: 각 기능과 오류 경로"""

import pytest

from app.core.exceptions import (
    ConstraintViolationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    LookupFailureError,
    MissingCredentialsError,
    MissingFieldError,
    NoFieldsProvidedError,
    NoKeyProvidedError,
    NotFoundError,
    PersistenceFailureError,
    StorageError,
    ValidationFailedError,
)
from app.models.user import USER_ID_MAX, User
from app.schemas import UserAuthRequest, UserCreateRequest, UserUpdateRequest
from app.services.user_service import UserService
from app.utils.security import BcryptPasswordHasher
from app.utils.validators import UserValidator


async def _create(service: UserService, name="Ann", email="ann@x.com", password="secret"):
    await service.create_user(UserCreateRequest(name=name, email=email, password=password))
    found = await service.search(email=email)
    return found.id


class StubRepository:
    """조회는 성공하고 저장 단계에서 실패하는 저장소 대역"""

    def __init__(self, user=None, fail_lookup=False, commit_error=None, remove_error=None):
        self.user = user
        self.fail_lookup = fail_lookup
        self.commit_error = commit_error or StorageError("disk full")
        self.remove_error = remove_error

    async def find_by_id(self, user_id):
        if self.fail_lookup:
            raise StorageError("lookup failed")
        return self.user

    async def find_one_by_field(self, field, value):
        if self.fail_lookup:
            raise StorageError("lookup failed")
        return None

    async def persist(self, user):
        pass

    async def remove(self, user):
        if self.remove_error:
            raise self.remove_error

    async def commit(self):
        raise self.commit_error


def _stub_service(repository) -> UserService:
    return UserService(repository, UserValidator(), BcryptPasswordHasher())


class TestCreateUser:
    async def test_create_and_search(self, service):
        result = await service.create_user(
            UserCreateRequest(name="Ann", email="ann@x.com", password="secret")
        )
        assert result.status == "User created successfully."

        found = await service.search(email="ann@x.com")
        by_id = await service.search(user_id=str(found.id))
        assert (by_id.name, by_id.email) == ("Ann", "ann@x.com")

    async def test_password_is_hashed(self, service, repository):
        user_id = await _create(service)
        user = await repository.find_by_id(user_id)

        assert user.password_hash != "secret"
        assert BcryptPasswordHasher().verify("secret", user.password_hash)

    @pytest.mark.parametrize("missing", ["name", "email", "password"])
    async def test_missing_field(self, service, repository, missing):
        payload = {"name": "Ann", "email": "ann@x.com", "password": "secret"}
        del payload[missing]

        with pytest.raises(MissingFieldError) as exc_info:
            await service.create_user(UserCreateRequest(**payload))

        assert exc_info.value.field == missing
        assert await repository.find_one_by_field("name", "Ann") is None

    async def test_validation_reports_all_messages(self, service):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.create_user(
                UserCreateRequest(name=" ", email="not-an-email", password="")
            )

        assert exc_info.value.errors == [
            "Name cannot be empty.",
            "Invalid email format.",
            "Password cannot be empty.",
        ]

    async def test_duplicate_email(self, service):
        await _create(service)

        with pytest.raises(DuplicateEmailError):
            await service.create_user(
                UserCreateRequest(name="Other", email="ann@x.com", password="secret2")
            )

        found = await service.search(email="ann@x.com")
        assert found.name == "Ann"

    async def test_storage_failure(self):
        service = _stub_service(StubRepository())

        with pytest.raises(PersistenceFailureError):
            await service.create_user(
                UserCreateRequest(name="Ann", email="ann@x.com", password="secret")
            )


class TestUpdateUser:
    async def test_update_name_only(self, service, repository):
        user_id = await _create(service)
        before_hash = (await repository.find_by_id(user_id)).password_hash

        result = await service.update_user(user_id, UserUpdateRequest(name="Anna"))
        assert result.status == "User updated successfully."

        user = await repository.find_by_id(user_id)
        assert user.name == "Anna"
        assert user.email == "ann@x.com"
        assert user.password_hash == before_hash

    async def test_update_password_rehashes(self, service, repository):
        user_id = await _create(service)

        await service.update_user(user_id, UserUpdateRequest(password="new-secret"))

        user = await repository.find_by_id(user_id)
        assert BcryptPasswordHasher().verify("new-secret", user.password_hash)
        assert not BcryptPasswordHasher().verify("secret", user.password_hash)

    async def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            await service.update_user(42, UserUpdateRequest(name="Anna"))

    async def test_no_fields(self, service):
        user_id = await _create(service)

        with pytest.raises(NoFieldsProvidedError):
            await service.update_user(user_id, UserUpdateRequest())

    async def test_blank_name(self, service):
        user_id = await _create(service)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.update_user(user_id, UserUpdateRequest(name="   "))
        assert exc_info.value.message == "Name cannot be empty."

    async def test_invalid_email_leaves_user_unchanged(self, service, repository):
        user_id = await _create(service)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.update_user(
                user_id, UserUpdateRequest(name="Anna", email="not-an-email")
            )
        assert exc_info.value.message == "Invalid email format."

        user = await repository.find_by_id(user_id)
        assert (user.name, user.email) == ("Ann", "ann@x.com")

    async def test_blank_password(self, service):
        user_id = await _create(service)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.update_user(user_id, UserUpdateRequest(password=" "))
        assert exc_info.value.message == "Password cannot be empty."

    async def test_email_taken_by_other_user(self, service):
        await _create(service)
        bob_id = await _create(service, name="Bob", email="bob@x.com")

        with pytest.raises(DuplicateEmailError):
            await service.update_user(bob_id, UserUpdateRequest(email="ann@x.com"))

    async def test_keeping_own_email(self, service):
        user_id = await _create(service)

        result = await service.update_user(
            user_id, UserUpdateRequest(name="Anna", email="ann@x.com")
        )
        assert result.status == "User updated successfully."

    async def test_storage_failure(self):
        user = User(user_id=1, name="Ann", email="ann@x.com", password_hash="hash")
        service = _stub_service(StubRepository(user=user))

        with pytest.raises(PersistenceFailureError):
            await service.update_user(1, UserUpdateRequest(name="Anna"))

    async def test_unique_violation_on_commit(self):
        # 사전 조회를 통과한 뒤 커밋에서 유니크 제약에 걸린 경우
        user = User(user_id=1, name="Ann", email="ann@x.com", password_hash="hash")
        repository = StubRepository(
            user=user, commit_error=ConstraintViolationError("UNIQUE constraint failed")
        )

        with pytest.raises(DuplicateEmailError):
            await _stub_service(repository).update_user(1, UserUpdateRequest(email="bob@x.com"))

    async def test_lookup_failure(self):
        service = _stub_service(StubRepository(fail_lookup=True))

        with pytest.raises(LookupFailureError):
            await service.update_user(1, UserUpdateRequest(name="Anna"))

    @pytest.mark.parametrize("user_id", [0, -1, USER_ID_MAX + 1, 10**25])
    async def test_out_of_range_id(self, service, user_id):
        with pytest.raises(NotFoundError):
            await service.update_user(user_id, UserUpdateRequest(name="Anna"))


class TestDeleteUser:
    async def test_delete_then_search(self, service):
        user_id = await _create(service)

        result = await service.delete_user(user_id)
        assert result.status == "User deleted successfully."

        with pytest.raises(NotFoundError) as exc_info:
            await service.search(user_id=str(user_id))
        assert exc_info.value.message == "User with this id not found."

    async def test_not_found(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_user(42)

    async def test_storage_failure(self):
        user = User(user_id=1, name="Ann", email="ann@x.com", password_hash="hash")
        service = _stub_service(StubRepository(user=user))

        with pytest.raises(PersistenceFailureError):
            await service.delete_user(1)

    async def test_remove_failure(self):
        user = User(user_id=1, name="Ann", email="ann@x.com", password_hash="hash")
        repository = StubRepository(user=user, remove_error=StorageError("locked"))

        with pytest.raises(PersistenceFailureError) as exc_info:
            await _stub_service(repository).delete_user(1)
        assert exc_info.value.message == "Error while deleting the user."

    async def test_lookup_failure(self):
        service = _stub_service(StubRepository(fail_lookup=True))

        with pytest.raises(LookupFailureError):
            await service.delete_user(1)

    @pytest.mark.parametrize("user_id", [0, USER_ID_MAX + 1, 10**25])
    async def test_out_of_range_id(self, service, user_id):
        with pytest.raises(NotFoundError):
            await service.delete_user(user_id)


class TestAuthenticate:
    async def test_success(self, service):
        user_id = await _create(service)

        result = await service.authenticate(
            UserAuthRequest(email="ann@x.com", password="secret")
        )

        assert result.user.model_dump() == {"id": user_id, "name": "Ann", "email": "ann@x.com"}

    async def test_wrong_password_and_unknown_email_are_identical(self, service):
        await _create(service)

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await service.authenticate(UserAuthRequest(email="ann@x.com", password="wrong"))
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await service.authenticate(UserAuthRequest(email="nobody@x.com", password="secret"))

        assert wrong_password.value.to_dict() == unknown_email.value.to_dict()

    @pytest.mark.parametrize(
        "payload", [{"email": "ann@x.com"}, {"password": "secret"}, {}]
    )
    async def test_missing_credentials(self, service, payload):
        with pytest.raises(MissingCredentialsError):
            await service.authenticate(UserAuthRequest(**payload))

    async def test_lookup_failure(self):
        service = _stub_service(StubRepository(fail_lookup=True))

        with pytest.raises(LookupFailureError):
            await service.authenticate(UserAuthRequest(email="ann@x.com", password="secret"))


class TestSearch:
    async def test_name_and_email_find_same_user(self, service):
        user_id = await _create(service)

        by_name = await service.search(name="Ann")
        by_email = await service.search(email="ann@x.com")

        assert by_name.id == by_email.id == user_id

    async def test_id_takes_priority(self, service):
        ann_id = await _create(service)
        await _create(service, name="Bob", email="bob@x.com")

        result = await service.search(user_id=str(ann_id), name="Bob", email="bob@x.com")
        assert result.name == "Ann"

    async def test_name_takes_priority_over_email(self, service):
        await _create(service)
        await _create(service, name="Bob", email="bob@x.com")

        result = await service.search(name="Bob", email="ann@x.com")
        assert result.name == "Bob"

    async def test_no_key(self, service):
        with pytest.raises(NoKeyProvidedError):
            await service.search()
        with pytest.raises(NoKeyProvidedError):
            await service.search(user_id="", name="", email="")

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"user_id": "42"}, "User with this id not found."),
            ({"user_id": "abc"}, "User with this id not found."),
            ({"user_id": "²"}, "User with this id not found."),
            ({"user_id": "0"}, "User with this id not found."),
            ({"user_id": "99999999999999999999999"}, "User with this id not found."),
            ({"name": "Nobody"}, "User with this name not found."),
            ({"email": "nobody@x.com"}, "User with this email not found."),
        ],
    )
    async def test_not_found_messages(self, service, kwargs, message):
        with pytest.raises(NotFoundError) as exc_info:
            await service.search(**kwargs)
        assert exc_info.value.message == message

    async def test_output_excludes_password(self, service):
        await _create(service)

        result = await service.search(name="Ann")
        assert set(result.model_dump()) == {"status", "id", "name", "email"}

    @pytest.mark.parametrize(
        "kwargs", [{"user_id": "1"}, {"name": "Ann"}, {"email": "ann@x.com"}]
    )
    async def test_lookup_failure(self, kwargs):
        service = _stub_service(StubRepository(fail_lookup=True))

        with pytest.raises(LookupFailureError):
            await service.search(**kwargs)
