from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from keikaku.domain.constants import DEFAULT_DESIRED_RETENTION, DEFAULT_MAXIMUM_INTERVAL


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/keikaku/config.toml",
        Path.home() / ".keikaku.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for keikaku.
    Supports loading from:
    1. Environment variables (KEIKAKU_*)
    2. Config file (~/.config/keikaku/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="KEIKAKU_",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/keikaku", validate_default=True
    )

    # Scheduler
    desired_retention: float = Field(default=DEFAULT_DESIRED_RETENTION, gt=0.0, lt=1.0)
    maximum_interval: int = Field(default=DEFAULT_MAXIMUM_INTERVAL, gt=0)
    enable_fuzzing: bool = False

    # LLM (meaning generation and word set import)
    llm_provider: Literal["none", "openai", "gemini"] = "none"
    llm_api_key: SecretStr | None = None
    llm_model: str | None = None
    llm_base_url: str | None = None

    # Output
    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for f in config_files():
            if f.exists():
                toml_file = f
                break

        # Earlier sources win: CLI overrides, then env, then the TOML file.
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("data_dir", mode="before")
    @classmethod
    def resolve_data_dir(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/keikaku/config.toml (if exists)
    3. Environment variables (KEIKAKU_*)
    4. cli_overrides (passed from Typer), None values ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
