"""
Application configuration using Pydantic settings
"""
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=3001)
    API_PREFIX: str = Field(default="/api/v1")

    # CORS (task pane origin)
    CORS_ORIGINS: List[str] = Field(default=["https://localhost:3000"])

    # Anthropic Configuration
    ANTHROPIC_API_KEY: Optional[str] = Field(default=None)
    ANTHROPIC_MODEL: str = Field(default="claude-3-5-sonnet-20241022")
    MAX_TOKENS: int = Field(default=2000)
    REQUEST_TIMEOUT: float = Field(default=60.0)  # seconds

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: Optional[str] = Field(default=None)
    LOG_FILE: Optional[str] = Field(default=None)

    # Layout
    MAX_SUGGESTIONS: int = Field(default=3)
    RESULT_SHEET_PREFIX: str = Field(default="Claude_")
    TITLE_COLUMN_WIDTH: float = Field(default=28.0)  # characters
    DATA_COLUMN_WIDTH: float = Field(default=14.0)
    RESULTS_COLUMN_WIDTH: float = Field(default=11.0)

    # Quick analysis summary sheet (20pt / 40pt columns)
    QUICK_ANALYSIS_PREFIX: str = Field(default="Quick_Analysis_")
    SUMMARY_LABEL_COLUMN_WIDTH: float = Field(default=3.0)
    SUMMARY_VALUE_COLUMN_WIDTH: float = Field(default=6.0)

    # Session limits
    MAX_SESSIONS: int = Field(default=256)
    STATUS_HISTORY_SIZE: int = Field(default=20)

    # Local secret storage for the API key
    SECRET_STORE_PATH: Optional[str] = Field(default=None)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()
