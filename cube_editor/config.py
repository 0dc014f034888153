from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from cube_editor.engine.catalog import NUM_POSITIONS


def _identity_answer() -> list[int]:
    return list(range(NUM_POSITIONS)) + [0] * NUM_POSITIONS


class Settings(BaseSettings):
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = ""
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True
    frontend_url: str = "http://localhost:3000"

    # Cube
    answer_state: list[int] = _identity_answer()
    # "package.module:ClassName" of the ParityOracle implementation
    parity_oracle: str = ""

    model_config = SettingsConfigDict(
        env_prefix="CUBE_EDITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
