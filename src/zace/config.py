"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `ZACE_ENV_FILE` to point to it.

Nothing in the planner output parser reads these settings; they are consumed by the model
client, the plan driver wiring in the CLI, and the surrounding agent loop.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Zace settings.

    All fields are environment-configurable. Prefix is `ZACE_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="ZACE_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # LLM
    openai_api_key: str | None = Field(default=None)
    openai_base_url: str | None = Field(default=None)
    openai_model: str = Field(default="gpt-4o-mini")
    openai_timeout_s: float = Field(default=120.0, gt=0.0)
    openai_temperature: float = Field(default=0.0, ge=0.0, le=2.0)

    # Planner
    planner_stream: bool = Field(default=False)
    planner_structured_output: bool = Field(default=False)
    planner_schema_strict: bool = Field(default=True)
    planner_max_steps: int = Field(default=30, ge=1, le=500)
    planner_max_invalid_artifact_chars: int = Field(default=4000, ge=200)

    # Artifacts
    planner_invalid_artifacts_dir: Path = Field(default=Path(".zace/runtime/planner"))


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("ZACE_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
