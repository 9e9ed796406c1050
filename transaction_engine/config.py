"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TXN_ENGINE_",
        extra="ignore",
    )

    # Business rules
    daily_debit_limit: Decimal = Decimal("20000")
    max_transactions_per_day: int = 10
    abnormal_spending_multiplier: Decimal = Decimal("1.5")
    spending_trend_months: int = 3

    # Storage
    draft_key: str = "transaction_draft"
    selected_customer_key: str = "selected_customer_id"
    storage_prefix: str = "banking_app_"
    database_url: str = "sqlite:///./transaction_engine.db"

    # Service
    service_name: str = "transaction-engine"
    log_level: str = "INFO"


settings = Settings()
