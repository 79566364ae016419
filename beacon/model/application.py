import datetime
import enum

from .base import BaseModel
from .enum import Tier
from .id import ID


class ProgrammingLanguage(enum.Enum):
    C = "c"
    CPP = "cpp"
    CSharp = "csharp"
    Go = "go"
    Java = "java"
    JavaScript = "javascript"
    Kotlin = "kotlin"
    Python = "python"
    Ruby = "ruby"
    Rust = "rust"
    Swift = "swift"
    Other = "other"


class Application(BaseModel):
    application_id: ID
    name: str | None = None
    organization_id: ID | None = None
    application_description: str | None = None
    programming_language: ProgrammingLanguage | None = None
    tier: Tier | None = None
    time_of_provisioning: datetime.datetime | None = None
