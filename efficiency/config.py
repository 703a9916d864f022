from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    allow_kokushi: bool = True
    allow_chiitoitsu: bool = True
    two_ply_max_shanten: int = 2
    log_level: str = "INFO"
    terms_display: Literal["english", "japanese"] = "english"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
