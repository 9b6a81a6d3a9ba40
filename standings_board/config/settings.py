import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from standings_board.models.enums import SourceKind

# Team that wins exact ties on every record tier.
PRIORITY_TEAM = "WISCONSIN"

DEFAULT_SHEET_ID = "1bOdPDPKf1QHUyayNgDToaCtu3k6_-bccnWLNqpyayvQ"
DEFAULT_SHEET_GID = "1204601349"
DEFAULT_SCRAPE_URL = "https://www.warrennolan.com/basketball/2026/conference/Big-Ten"


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Data source selection
    source: SourceKind = Field(
        SourceKind.CSV, description="Where the board pulls standings from."
    )

    # Spreadsheet (CSV export) Configuration
    sheet_id: str = Field(
        DEFAULT_SHEET_ID, description="Google Sheets document id to export."
    )
    sheet_gid: str = Field(DEFAULT_SHEET_GID, description="Sheet tab gid.")
    csv_url: Optional[str] = Field(
        None, description="Full CSV URL, overrides sheet_id/sheet_gid when set."
    )

    # Scrape / relay Configuration
    scrape_url: str = Field(
        DEFAULT_SCRAPE_URL, description="Third-party standings page to scrape."
    )
    scrape_user_agent: str = Field(
        "Mozilla/5.0 (compatible; BigTenStandings/1.0)",
        description="User-Agent sent to the scraped site.",
    )
    relay_url: str = Field(
        "http://127.0.0.1:8787/", description="Relay endpoint used by source=relay."
    )
    relay_host: str = Field("127.0.0.1", description="Bind host for the relay.")
    relay_port: int = Field(8787, ge=1, le=65535, description="Bind port for the relay.")
    relay_cache_max_age: int = Field(
        300, ge=0, description="Cache-Control max-age (seconds) on relay responses."
    )

    # Refresh Settings
    refresh_interval_seconds: float = Field(
        15 * 60, gt=0, description="Seconds between refresh passes."
    )
    request_timeout_seconds: float = Field(
        30.0, gt=0, description="Timeout for each upstream HTTP request."
    )

    # Ranking Settings
    priority_team: str = Field(
        PRIORITY_TEAM, description="Team bumped to the top of exact-record ties."
    )

    # Output Settings
    html_output_path: Optional[str] = None
    json_output_path: Optional[str] = None

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def sheet_csv_url(self) -> str:
        """CSV export URL for the configured sheet."""
        if self.csv_url:
            return self.csv_url
        return (
            f"https://docs.google.com/spreadsheets/d/{self.sheet_id}"
            f"/export?format=csv&gid={self.sheet_gid}"
        )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        settings.priority_team = settings.priority_team.strip().upper()
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
