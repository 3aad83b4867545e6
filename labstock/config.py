from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Store-level settings (see labstock.engine.settings) take precedence over the
    engine defaults declared here.
    """
    # Application
    app_env: str = "local"
    log_level: str = "INFO"
    app_url: str = ""

    # Data paths
    data_dir: str = "sample_data"

    # Engine defaults
    default_consumption_calc_days: int = 7
    max_consumption_calc_days: int = 90
    default_reorder_threshold_days: int = 30
    default_lead_time_days: int = 7

    # Projection / history windows
    forecast_days: int = 7
    history_days: int = 30

    # Orders
    system_orderer_name: str = "system"

    # Seed data settings
    default_seed_products: int = 12
    default_seed_weeks: int = 12
    default_seed_value: int = 42

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
