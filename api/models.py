"""SQLAlchemy table models for the ordering store.

Repositories issue Core statements against these tables and map the
resulting rows to the records in ``schemas.py``; the ORM classes are never
handed to callers.
"""

from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class Role(str, PyEnum):
    """Role labels a user can hold. New registrations always get USER."""

    ADMIN = "Admin"
    USER = "User"
    LOCKED = "Locked"


class UserRole(Base):
    """Role labels attached to users (Admin, User, Locked)."""

    __tablename__ = "user_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(25), unique=True, nullable=False)


class AppUser(Base):
    __tablename__ = "app_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(25), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(256), nullable=False)
    first_name: Mapped[str] = mapped_column(String(25), nullable=False)
    last_name: Mapped[str] = mapped_column(String(25), nullable=False)
    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    role_id: Mapped[int] = mapped_column(ForeignKey("user_roles.id"), nullable=False)


class AppOrder(Base):
    """Customer orders.

    ``customerid`` must name an existing user. Deleting a user does not
    cascade; callers remove the user's orders first.
    """

    __tablename__ = "app_orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        "customerid", ForeignKey("app_users.id"), nullable=False, index=True
    )
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    location: Mapped[str] = mapped_column(String(256), nullable=False)
    destination: Mapped[str] = mapped_column(String(256), nullable=False)


class AppItem(Base):
    __tablename__ = "app_items"
    __table_args__ = (
        CheckConstraint("cost >= 0", name="ck_app_items_cost_non_negative"),
        CheckConstraint("amount >= 0", name="ck_app_items_amount_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(String(256), nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)


class OrderItem(Base):
    """Join table linking orders to items."""

    __tablename__ = "order_item_jc"

    order_id: Mapped[int] = mapped_column(
        "orderid", ForeignKey("app_orders.id"), primary_key=True
    )
    item_id: Mapped[int] = mapped_column(
        "itemid", ForeignKey("app_items.id"), primary_key=True
    )
