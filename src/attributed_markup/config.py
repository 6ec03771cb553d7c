"""Configuration management for Attributed Markup."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global codec configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Relative font-size levels (multipliers of the base font size)
    font_sizes: list[float] = Field(
        default=[0.6, 0.75, 0.9, 1.0, 1.2, 1.5, 2.0, 3.0],
        alias="ATTRIBUTED_MARKUP_FONT_SIZES",
    )
    default_level: int = Field(
        default=3,
        alias="ATTRIBUTED_MARKUP_DEFAULT_LEVEL",
    )

    # Font family used by <icon> when no font parameter is given
    icon_font: str = Field(
        default="FontAwesome",
        alias="ATTRIBUTED_MARKUP_ICON_FONT",
    )

    # Base font used when a caller supplies none
    base_font_size: float = Field(
        default=17.0,
        gt=0,
        alias="ATTRIBUTED_MARKUP_BASE_FONT_SIZE",
    )
    cap_height_ratio: float = Field(
        default=0.7,
        gt=0,
        alias="ATTRIBUTED_MARKUP_CAP_HEIGHT_RATIO",
    )

    # BeautifulSoup tree builder ("html.parser", "lxml", "html5lib")
    tree_builder: str = Field(
        default="html.parser",
        alias="ATTRIBUTED_MARKUP_TREE_BUILDER",
    )

    @field_validator("font_sizes")
    @classmethod
    def _check_font_sizes(cls, value: list[float]) -> list[float]:
        if not value:
            raise ValueError("font size table must not be empty")
        if any(v <= 0 for v in value):
            raise ValueError("font size multipliers must be positive")
        return value


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None, **overrides) -> Settings:
    """Load settings from an optional specific .env file.

    Keyword overrides replace individual values wholesale, e.g.
    ``load_settings(font_sizes=[0.5, 1.0, 2.0])``.
    """
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file, **overrides)
    else:
        _settings = Settings(**overrides)
    return _settings
