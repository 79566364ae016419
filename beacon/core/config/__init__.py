__all__ = [
    "DatabaseSecrets",
    "DatabaseSettings",
    "LoggingSettings",
    "RetentionSettings",
    "Secrets",
    "Settings",
    "StorageSettings",
]


from .logging import LoggingSettings
from .secrets import DatabaseSecrets, Secrets
from .settings import Settings
from .storage import DatabaseSettings, RetentionSettings, StorageSettings
