"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "finhealth-gateway"
    log_level: str = "INFO"

    # Analysis
    default_analysis_mode: str = "comprehensive"
    max_recommendations: int = 10

    # Projections (annual rates)
    projection_conservative_return: float = 0.06
    projection_moderate_return: float = 0.08
    projection_aggressive_return: float = 0.10
    retirement_projection_return: float = 0.07


settings = Settings()
