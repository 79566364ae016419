import pydantic as p
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from beacon.model import DeploymentEnvironment

from .base import BaseSecrets
from .source import AnsibleVaultSecretsSource


class DatabaseSecrets(BaseSecrets):
    username: p.Secret[str] | None = None
    password: p.Secret[str] | None = None


class StorageSecrets(BaseSecrets):
    database: DatabaseSecrets = DatabaseSecrets()


class Secrets(BaseSecrets):
    """Credentials decrypted from the ansible vault in the config directory."""

    root: p.AnyUrl
    env: DeploymentEnvironment

    storage: StorageSecrets = StorageSecrets()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, AnsibleVaultSecretsSource(settings_cls)
