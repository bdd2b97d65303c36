from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "AccumulationSettings",
    "LoggingSettings",
    "Settings",
    "print_config",
    "reload_settings",
    "settings",
]


class LoggingSettings(BaseModel):
    """
    Logging settings for the application
    """

    disabled: bool = False
    clear_loggers: bool = True
    console_log_level: str = "WARNING"
    log_file: str | None = None
    log_file_level: str | None = None


class AccumulationSettings(BaseModel):
    """
    Settings passed explicitly to the accumulation façade
    """

    verbose: bool = False
    quantile_tolerance: float = Field(default=1e-12, ge=0.0)
    normalize_tables: bool = False
    ess_threshold: float = Field(default=30.0, ge=0.0)


class Settings(BaseSettings):
    """
    All the settings are powered by pydantic_settings and could be
    populated from the .env file.

    The format to populate the settings is next

    ```sh
    export SMCSTATS__LOGGING__DISABLED=true
    export SMCSTATS__ACCUMULATION__ESS_THRESHOLD=50
    ```
    """

    model_config = SettingsConfigDict(
        env_prefix="SMCSTATS__",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
        env_file=".env",
    )

    logging: LoggingSettings = LoggingSettings()
    accumulation: AccumulationSettings = AccumulationSettings()

    # Output settings
    float_precision: int = 6

    def generate_env_file(self) -> str:
        """
        Generate the .env file from the current settings
        """
        return Settings._recursive_generate_env(
            self,
            self.model_config["env_prefix"],  # type: ignore  # noqa: PGH003
            self.model_config["env_nested_delimiter"],  # type: ignore  # noqa: PGH003
        )

    @staticmethod
    def _recursive_generate_env(model: BaseModel, prefix: str, delimiter: str) -> str:
        env_file = ""
        add_models = []
        for key, value in model:
            if isinstance(value, BaseModel):
                # add nested properties to be processed after the current level
                add_models.append((key, value))
                continue

            tag = f"{prefix}{key.upper()}"
            if value is None or value == "":
                env_file += f"{tag}=\n"
            else:
                env_file += f'{tag}="{value}"\n'

        for key, value in add_models:
            env_file += Settings._recursive_generate_env(
                value, f"{prefix}{key.upper()}{delimiter}", delimiter
            )
        return env_file


settings = Settings()


def reload_settings():
    """
    Reload the settings from the environment variables
    """
    new_settings = Settings()
    settings.__dict__.update(new_settings.__dict__)


def print_config():
    """
    Print the current configuration settings
    """
    print(f"Settings: \n{settings.generate_env_file()}")  # noqa: T201
