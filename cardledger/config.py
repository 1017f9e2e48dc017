from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CARDLEDGER_")

    app_name: str = "CardLedger"
    debug: bool = False
    log_level: str = "INFO"

    # Cash balance every new ledger starts with
    starting_balance: Decimal = Decimal(0)

    # Trades whose value difference reaches this amount need confirmation
    unbalanced_trade_threshold: Decimal = Decimal("1.00")


settings = Settings()
