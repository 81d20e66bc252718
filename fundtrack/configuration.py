"""Mini README: Centralised configuration for the fund tracker.

Structure:
    * FundTrackSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor shared by the CLI and the web interface.

Usage:
    Variables use the ``FUNDTRACK_`` prefix (``FUNDTRACK_DATA_DIRECTORY``,
    ``FUNDTRACK_AI_API_KEY`` ...) and may live in a local ``.env`` file. AI
    features stay disabled until an API key is supplied.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FundTrackSettings(BaseSettings):
    """Runtime configuration for the ledger dashboard."""

    model_config = SettingsConfigDict(
        env_prefix="FUNDTRACK_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling reload behaviour and log verbosity.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted transaction, diesel and category blobs.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the dashboard API to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the dashboard API exposes.",
        ge=1,
        le=65535,
    )
    autosave_delay_seconds: float = Field(
        1.0,
        description="Quiet period after the last mutation before state is flushed to disk.",
        ge=0.0,
    )
    currency_code: str = Field(
        "PHP",
        description="ISO currency code used when formatting amounts for display.",
    )
    ai_model: str = Field(
        "gemini/gemini-2.0-flash",
        description="litellm model string used for insights and free-text parsing.",
    )
    ai_api_key: Optional[str] = Field(
        None,
        description="API key for the AI provider. Leave unset to disable AI features.",
    )
    ai_timeout_seconds: float = Field(
        30.0,
        description="Upper bound for a single AI completion request.",
        gt=0.0,
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure the data directory expands user paths and exists."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def ai_enabled(self) -> bool:
        """Whether an AI provider has been configured."""

        return bool(self.ai_api_key)


@lru_cache()
def get_settings() -> FundTrackSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FundTrackSettings()
