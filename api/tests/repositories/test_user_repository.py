"""Integration tests for UserRepository against in-memory SQLite."""

import pytest
from sqlalchemy import text

from core.errors import InternalServerError
from models import Role
from repositories import UserRepository
from schemas import User
from tests.factories import UserFactory


@pytest.mark.integration
class TestUserReads:
    async def test_get_all_empty_table(self, user_repo: UserRepository):
        assert await user_repo.get_all() == []

    async def test_get_all_orders_by_id(self, user_repo, admin_user, regular_user):
        users = await user_repo.get_all()
        assert [u.id for u in users] == [admin_user.id, regular_user.id]

    async def test_get_by_id_maps_role(self, user_repo, admin_user):
        user = await user_repo.get_by_id(admin_user.id)
        assert user == admin_user
        assert user.role is Role.ADMIN
        assert user.password == "password"

    async def test_get_by_id_missing_returns_none(self, user_repo):
        assert await user_repo.get_by_id(999) is None

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("username", "bbailey"),
            ("email", "bbailey@example.com"),
            ("first_name", "Bob"),
            ("last_name", "Bailey"),
        ],
    )
    async def test_get_by_unique_key(self, user_repo, regular_user, key, value):
        user = await user_repo.get_by_unique_key(key, value)
        assert user.id == regular_user.id

    async def test_get_by_unique_key_no_match(self, user_repo, regular_user):
        assert await user_repo.get_by_unique_key("username", "nobody") is None

    async def test_get_by_unique_key_rejects_unknown_column(self, user_repo):
        with pytest.raises(ValueError, match="Unsupported user lookup key"):
            await user_repo.get_by_unique_key("password", "password")

    async def test_get_by_credentials(self, user_repo, regular_user):
        user = await user_repo.get_by_credentials("bbailey", "password")
        assert user.id == regular_user.id

    async def test_get_by_credentials_wrong_password(self, user_repo, regular_user):
        assert await user_repo.get_by_credentials("bbailey", "wrong") is None


@pytest.mark.integration
class TestUserWrites:
    async def test_save_assigns_id_and_defaults_role(self, user_repo):
        new_user = UserFactory.build()

        saved = await user_repo.save(new_user)

        assert saved.id is not None
        stored = await user_repo.get_by_id(saved.id)
        assert stored.username == new_user.username
        assert stored.role is Role.USER

    async def test_save_keeps_explicit_role(self, user_repo):
        saved = await user_repo.save(UserFactory.build(role=Role.LOCKED))
        stored = await user_repo.get_by_id(saved.id)
        assert stored.role is Role.LOCKED

    async def test_save_duplicate_username_is_internal_error(
        self, user_repo, regular_user
    ):
        duplicate = UserFactory.build(username=regular_user.username)
        with pytest.raises(InternalServerError) as exc_info:
            await user_repo.save(duplicate)
        # Driver text never leaks
        assert "UNIQUE" not in exc_info.value.message
        assert exc_info.value.__cause__ is None

    async def test_update_overwrites_columns(self, user_repo, regular_user):
        changed = regular_user.model_copy(
            update={"first_name": "Robert", "email": "rbailey@example.com"}
        )

        assert await user_repo.update(changed) is True

        stored = await user_repo.get_by_id(regular_user.id)
        assert stored.first_name == "Robert"
        assert stored.email == "rbailey@example.com"

    async def test_update_missing_row_still_true(self, user_repo):
        ghost = User(
            id=999,
            username="ghost",
            password="password",
            first_name="No",
            last_name="Body",
            email="ghost@example.com",
        )
        assert await user_repo.update(ghost) is True
        assert await user_repo.get_by_id(999) is None

    async def test_delete_by_id(self, user_repo, regular_user):
        assert await user_repo.delete_by_id(regular_user.id) is True
        assert await user_repo.get_by_id(regular_user.id) is None

    async def test_delete_missing_row_still_true(self, user_repo):
        assert await user_repo.delete_by_id(999) is True


@pytest.mark.integration
async def test_driver_failure_becomes_internal_error(test_engine, user_repo):
    async with test_engine.begin() as conn:
        await conn.execute(text("DROP TABLE app_users"))

    with pytest.raises(InternalServerError):
        await user_repo.get_all()
