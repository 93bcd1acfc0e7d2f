"""
Configuration management for Kitchen Ops
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Kitchen Ops"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./kitchen_ops.db"

    # Claude API
    ANTHROPIC_API_KEY: str = ""
    CLAUDE_MODEL: str = "claude-sonnet-4-20250514"
    CLAUDE_MAX_TOKENS: int = 4096

    # Locations
    DEFAULT_LOCATION_ID: str = "default"
    DEFAULT_LOCATION_NAME: str = "Main"

    # HACCP plan generation (max records read per entity)
    HACCP_MENU_ITEM_LIMIT: int = 500
    HACCP_CCP_LIMIT: int = 200
    HACCP_HAZARD_LIMIT: int = 100
    HACCP_ASSET_LIMIT: int = 100
    HACCP_EXISTING_PLAN_LIMIT: int = 10
    HACCP_LINKED_MENU_ITEM_LIMIT: int = 50

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
