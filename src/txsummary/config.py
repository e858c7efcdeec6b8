"""
Configuration management for transaction summaries.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from txsummary.constants import CAT_DECIMALS, DEFAULT_LOCALE, XCH_DECIMALS, XCH_TICKER
from txsummary.units import FormattingContext


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TXSUMMARY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Testnet wallets use "TXCH"
    ticker: str = XCH_TICKER
    decimals: int = Field(default=XCH_DECIMALS, ge=0, le=18)
    cat_decimals: int = Field(default=CAT_DECIMALS, ge=0, le=18)
    locale: str = DEFAULT_LOCALE

    def formatting_context(self) -> FormattingContext:
        return FormattingContext(
            ticker=self.ticker,
            decimals=self.decimals,
            cat_decimals=self.cat_decimals,
            locale=self.locale,
        )


def get_settings() -> Settings:
    return Settings()
