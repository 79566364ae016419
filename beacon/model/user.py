import enum

from .base import BaseModel
from .id import ID


class Role(enum.Enum):
    Developer = "developer"
    Manager = "manager"
    Operations = "operations"
    ProductManager = "product_manager"
    QA = "qa"
    Tester = "tester"


class User(BaseModel):
    user_id: ID
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    roles: list[Role] = []
    github_profile: str | None = None
