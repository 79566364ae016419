import typing as t

from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import PydanticBaseSettingsSource

from beacon.model import BaseModel


class _InitOnly(PydanticBaseSettings):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # nested sections are filled in by their parent's sources, never from the environment
        return (init_settings,)


# NOTE: BaseModel comes after the pydantic-settings base in the MRO, so its
#       by_alias=True model_dump is the one these classes use
class BaseSettings(_InitOnly, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    def __init__(self, cf: dict[str, t.Any] | None = None, **kwargs: t.Any):
        # specifically allow initialization with a dict
        if cf is not None:
            kwargs = {**cf, **kwargs}
        super().__init__(**kwargs)


class BaseSecrets(_InitOnly, BaseModel):  # pyright: ignore [reportIncompatibleVariableOverride]
    def __init__(self, cf: dict[str, t.Any] | None = None, **kwargs: t.Any):
        if cf is not None:
            kwargs = {**cf, **kwargs}
        super().__init__(**kwargs)
