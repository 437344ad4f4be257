from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "sluggable"

    # Slug generation
    SLUG_ENABLED: bool = True
    SLUG_GENERATOR: Optional[str] = None  # "package.module:ClassName"
    SLUG_MAX_ATTEMPTS: int = Field(default=100, ge=1)
    SLUG_FAIL_OPEN: bool = True

    # Database
    DATABASE_URL: str = "sqlite:///./sluggable.db"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


settings = Settings()
