"""Configuration management using Pydantic Settings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from budget_guard.domain.thresholds import RiskThresholds


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "budget-guard"
    log_level: str = "INFO"

    # Risk engine thresholds (ratios of the allocation / of the budget window)
    risk_spending_variance_threshold: float = Field(default=0.30, ge=0)
    risk_rapid_spending_utilization: float = Field(default=0.80, ge=0)
    risk_rapid_spending_elapsed_fraction: float = Field(default=0.25, ge=0, le=1)
    risk_allocation_deviation_threshold: float = Field(default=0.20, ge=0)
    risk_high_utilization_threshold: float = Field(default=0.80, ge=0)


def load_thresholds(config: Settings) -> RiskThresholds:
    """Build the engine's immutable thresholds from settings"""
    return RiskThresholds(
        spending_variance=config.risk_spending_variance_threshold,
        rapid_spending_utilization=config.risk_rapid_spending_utilization,
        rapid_spending_elapsed_fraction=config.risk_rapid_spending_elapsed_fraction,
        allocation_deviation=config.risk_allocation_deviation_threshold,
        high_utilization=config.risk_high_utilization_threshold,
    )


settings = Settings()
