# region Docstring
"""
cbqr_core.config.factory
Settings base class with YAML + environment sources, and a cached factory.
Overview:
- FactoryBaseSettings layers configuration from environment variables, a .env
    file and the cbqr YAML files found in APP_ROOT.
- get_settings instantiates any settings class once and caches it.
Configuration Priority (highest to lowest):
    1. Environment variables
    2. .env file values
    3. cbqr.{APP_ENV}.yaml
    4. cbqr.yaml
    5. Init kwargs
    6. Field defaults
Design notes:
- Unknown keys are ignored so a shared .env can hold settings for other tools.
- Tests that change the environment must call get_settings.cache_clear().
"""
# endregion
# region Imports
from functools import lru_cache
from typing import Type, TypeVar

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .base import APP_ENV, APP_ROOT

# endregion
# region FactoryBaseSettings Class
T = TypeVar("T", bound=BaseSettings)


class FactoryBaseSettings(BaseSettings):
    """
    BaseSettings reading env vars, .env and cbqr YAML files.
    Priority: Env Vars > .env > YAML (Env specific) > YAML (Default) > Init kwargs > Defaults
    """

    model_config = SettingsConfigDict(
        env_file=APP_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Later files in the list override earlier ones
        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=[APP_ROOT / "cbqr.yaml", APP_ROOT / f"cbqr.{APP_ENV}.yaml"],
        )
        return (
            env_settings,
            dotenv_settings,
            yaml_settings,
            init_settings,
        )


# endregion
# region get_settings Factory Function


@lru_cache
def get_settings(settings_cls: Type[T]) -> T:
    """
    Factory function to load any settings class.
    Results are cached so files are read once per settings class.
    """
    return settings_cls()


# endregion
