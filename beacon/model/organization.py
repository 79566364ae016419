import enum

from .base import BaseModel
from .enum import Tier
from .id import ID, IDSet


class Industry(enum.Enum):
    Technology = "technology"
    Finance = "finance"
    Health = "health"
    Education = "education"
    Retail = "retail"
    Entertainment = "entertainment"
    Government = "government"
    Other = "other"


class Organization(BaseModel):
    organization_id: ID
    organization_name: str | None = None
    owners: IDSet = []
    logo_link: str | None = None
    industry: Industry | None = None
    organization_email: str | None = None
    github_profile: str | None = None
    stock_market_symbol: str | None = None
    tier: Tier | None = None
    organization_description: str | None = None
    website: str | None = None
