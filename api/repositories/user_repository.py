"""User repository for database operations."""

from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from models import AppUser, Role, UserRole
from repositories.mappers import map_user_row
from repositories.utils import db_operation
from schemas import User

# Columns a user can be looked up by (record field name -> column)
LOOKUP_COLUMNS = {
    "username": AppUser.username,
    "email": AppUser.email,
    "first_name": AppUser.first_name,
    "last_name": AppUser.last_name,
}


def _base_query() -> Select:
    return select(
        AppUser.id,
        AppUser.username,
        AppUser.password,
        AppUser.first_name,
        AppUser.last_name,
        AppUser.email,
        UserRole.name.label("role_name"),
    ).join(UserRole, AppUser.role_id == UserRole.id)


def _role_id(role: Role | None):
    """Scalar subquery resolving a role label to its id."""
    name = (role or Role.USER).value
    return select(UserRole.id).where(UserRole.name == name).scalar_subquery()


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @db_operation("users.get_all")
    async def get_all(self) -> list[User]:
        async with self.engine.connect() as conn:
            result = await conn.execute(_base_query().order_by(AppUser.id))
            return [map_user_row(row) for row in result.mappings()]

    @db_operation("users.get_by_id")
    async def get_by_id(self, user_id: int) -> User | None:
        async with self.engine.connect() as conn:
            result = await conn.execute(_base_query().where(AppUser.id == user_id))
            return map_user_row(result.mappings().first())

    @db_operation("users.get_by_unique_key")
    async def get_by_unique_key(self, key: str, value: str) -> User | None:
        """Get the user whose ``key`` column equals ``value``.

        ``key`` is a record field name and must be one of LOOKUP_COLUMNS;
        the service layer whitelists it before calling.
        """
        column = LOOKUP_COLUMNS.get(key)
        if column is None:
            raise ValueError(f"Unsupported user lookup key: {key!r}")

        async with self.engine.connect() as conn:
            result = await conn.execute(_base_query().where(column == value))
            return map_user_row(result.mappings().first())

    @db_operation("users.get_by_credentials")
    async def get_by_credentials(self, username: str, password: str) -> User | None:
        async with self.engine.connect() as conn:
            result = await conn.execute(
                _base_query().where(
                    AppUser.username == username, AppUser.password == password
                )
            )
            return map_user_row(result.mappings().first())

    @db_operation("users.save")
    async def save(self, new_user: User) -> User:
        """Insert a user and return it with its generated id."""
        stmt = (
            insert(AppUser)
            .values(
                {
                    AppUser.username: new_user.username,
                    AppUser.password: new_user.password,
                    AppUser.first_name: new_user.first_name,
                    AppUser.last_name: new_user.last_name,
                    AppUser.email: new_user.email,
                    AppUser.role_id: _role_id(new_user.role),
                }
            )
            .returning(AppUser.id)
        )
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            new_id = result.scalar_one()

        return new_user.model_copy(update={"id": new_id})

    @db_operation("users.update")
    async def update(self, updated_user: User) -> bool:
        """Overwrite every mutable column. True even if no row matched."""
        stmt = (
            update(AppUser)
            .where(AppUser.id == updated_user.id)
            .values(
                {
                    AppUser.username: updated_user.username,
                    AppUser.password: updated_user.password,
                    AppUser.first_name: updated_user.first_name,
                    AppUser.last_name: updated_user.last_name,
                    AppUser.email: updated_user.email,
                    AppUser.role_id: _role_id(updated_user.role),
                }
            )
        )
        async with self.engine.begin() as conn:
            await conn.execute(stmt)
        return True

    @db_operation("users.delete_by_id")
    async def delete_by_id(self, user_id: int) -> bool:
        """Delete a user by ID. Their orders are left in place."""
        async with self.engine.begin() as conn:
            await conn.execute(delete(AppUser).where(AppUser.id == user_id))
        return True
