"""
Configuration settings for the Order Miner application.
Designed to support more than one retailer template and mailbox query.
"""
from typing import Any, Dict

from pydantic import Field
from pydantic_settings import BaseSettings


class GmailSettings(BaseSettings):
    """Gmail API connection settings."""

    credentials_file: str = Field(
        default="credentials.json", description="OAuth client secrets downloaded from Google Cloud"
    )
    token_file: str = Field(
        default="./data/token.json", description="Path to the cached OAuth token"
    )
    scopes: str = Field(
        default="https://www.googleapis.com/auth/gmail.readonly",
        description="OAuth scopes (space or comma separated)",
    )
    user_id: str = Field(default="me", description="Gmail user id")
    max_results: int = Field(default=10, description="Maximum messages listed per sync")
    include_spam_trash: bool = Field(default=False, description="Search spam and trash too")

    class Config:
        env_prefix = "GMAIL_"


class DatabaseSettings(BaseSettings):
    """Database connection settings."""

    url: str = Field(default="sqlite:///./data/orders.db", description="Database URL")
    echo: bool = Field(default=False, description="Echo SQL queries")

    class Config:
        env_prefix = "DATABASE_"


class SyncSettings(BaseSettings):
    """Incremental sync settings."""

    template: str = Field(default="wholefoods", description="Order template to extract with")
    snapshot_file: str = Field(
        default="./data/orders.json", description="JSON snapshot of the last sync"
    )
    cursor_file: str = Field(
        default="./data/last_update.txt", description="File holding the sync watermark"
    )
    default_cursor: str = Field(
        default="2021-Jan-01", description="Watermark used before the first sync (YYYY-Mon-DD)"
    )

    class Config:
        env_prefix = "SYNC_"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    file: str = Field(default="logs/order_miner.log", description="Log file path")
    format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}",
        description="Log format",
    )

    class Config:
        env_prefix = "LOG_"


class AppSettings(BaseSettings):
    """Application settings."""

    name: str = Field(default="Order Miner", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    version: str = Field(default="1.0.0", description="Application version")

    class Config:
        env_prefix = "APP_"


class Settings(BaseSettings):
    """Main settings class combining all configurations."""

    gmail: GmailSettings = GmailSettings()
    database: DatabaseSettings = DatabaseSettings()
    sync: SyncSettings = SyncSettings()
    logging: LoggingSettings = LoggingSettings()
    app: AppSettings = AppSettings()

    # Retailer templates: mailbox search plus the markers that label each field
    order_templates: Dict[str, Dict[str, Any]] = Field(
        default={
            "wholefoods": {
                "search_query": "{from:order-update@amazon.com} 'your delivery is complete' 'Grand total'",
                "delivery_marker": "delivery time:",
                "total_marker": "Grand total:",
                "order_id_marker": "Details Order",
                "tail_margin": 20,
            },
        }
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
