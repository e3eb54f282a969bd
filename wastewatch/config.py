"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
    
    # Database (backs the key-value snapshot store)
    database_url: str = "sqlite+aiosqlite:///./data/wastewatch.db"
    
    @field_validator("database_url")
    @classmethod
    def fix_database_url(cls, v: str) -> str:
        """Convert postgresql:// to postgresql+asyncpg:// for async support"""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v
    
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite"""
        return self.database_url.startswith("sqlite")
    
    # Report store
    reports_storage_key: str = "reports"
    seed_sample_data: bool = True
    # Validate status changes against the pending -> resolved lifecycle
    strict_transitions: bool = False
    # Compare-and-set snapshot writes for multi-writer deployments
    optimistic_locking: bool = False
    
    # Application
    app_name: str = "WasteWatch"
    debug: bool = False
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
