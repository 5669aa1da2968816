from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    debug: bool = False
    token_expiration_hours: int = Field(default=24, gt=0)  # Lifetime of an issued session token
    session_sweep_interval_seconds: int = Field(default=0, ge=0)  # 0 disables the background sweep
    cors_origins: list[str] = ["*"]  # K2 SmartObject calls from arbitrary origins

    model_config = {
        "env_file": [".env"],
        "env_prefix": "K2AUTH_",
        "extra": "ignore",
    }
