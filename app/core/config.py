"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.enums import GuestSource


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Wedding Planner"
    debug: bool = False

    # Logging
    log_dir: Path = Path.home() / ".logs" / "wedding_planner"

    # Storage
    database_url: str = "sqlite:///./wedding_planner.db"

    # Guests
    default_guest_source: GuestSource = GuestSource.MANUAL
    # When True, removing a guest also frees every room/vehicle place held
    # by the guest or their family members.
    cascade_guest_removal: bool = False


settings = Settings()
