from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MTGPRICES_")

    app_name: str = "mtgprices"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./card.db"

    report_path: Path = Path("prices_0.txt")
    report_encoding: str = "iso-8859-1"

    # Strict parsing turns report irregularities into ReportSyntaxError
    # Default: False (truncated reports load as far as they parse)
    strict_parsing: bool = False

    # Prices with more than 3 fractional digits lose their fraction.
    # Rows already stored depend on this, so it stays on by default.
    legacy_fraction_truncation: bool = True


settings = Settings()
