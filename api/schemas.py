"""Pydantic records for the ordering API.

The same records are used as request bodies, service return values and
response models. JSON uses camelCase keys (``firstName``, ``customerId``);
Python code uses snake_case attributes. Either spelling is accepted on input.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PlainSerializer
from pydantic.alias_generators import to_camel

from models import Role

# Costs are stored as NUMERIC(10, 2) but travel as JSON numbers
Money = Annotated[
    Decimal,
    Field(ge=0),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class Record(BaseModel):
    """Base for domain records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Item(Record):
    id: int | None = None
    name: str
    description: str
    cost: Money
    amount: NonNegativeInt


class Order(Record):
    """An order placed by a user; ``status`` is True while the order is open."""

    id: int | None = None
    customer_id: int
    status: bool
    location: str
    destination: str


class User(Record):
    """A registered user. ``password`` never leaves the service layer."""

    id: int | None = None
    username: str
    password: str
    first_name: str
    last_name: str
    email: str
    role: Role | None = None


class UserResponse(Record):
    """User as returned to callers (no password field)."""

    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    role: Role | None = None


class Principal(Record):
    """Session payload stored by ``POST /auth``."""

    id: int
    username: str
    role: Role


class Credentials(BaseModel):
    """Login request body.

    Both fields default to empty so that missing values reach the service
    and come back as 400 rather than a schema error.
    """

    username: str = ""
    password: str = ""


class ErrorResponse(BaseModel):
    """Body rendered for every application error."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    status_code: int
    message: str
    timestamp: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str


class PoolStatusResponse(BaseModel):
    """Connection pool status."""

    pool_size: int
    checked_out: int
    overflow: int
    checked_in: int


class DetailedHealthResponse(BaseModel):
    """Detailed health check response with component status."""

    status: str
    service: str
    database: bool
    pool: PoolStatusResponse | None = None
