"""Application configuration settings."""

import os
from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from propdash.schemas.energy import EnergyGroup

DEFAULT_ENERGY_GROUPS: list[EnergyGroup] = [
    EnergyGroup(
        id="main-building",
        name="Main Building",
        properties=["Unit 101", "Unit 102", "Unit 103", "Unit 104"],
        residual_receiver="Unit 104",
    ),
    EnergyGroup(
        id="garden-houses",
        name="Garden Houses",
        properties=["House A", "House B", "House C"],
        residual_receiver="House C",
    ),
]


def _get_default_database_url() -> str:
    """Get the default database URL, using a mounted volume if available."""
    if os.path.isdir("/data"):
        return "sqlite:////data/propdash.db"
    return "sqlite:///./propdash.db"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "Propdash"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Database - defaults to the /data volume if present
    DATABASE_URL: str = _get_default_database_url()

    # Energy bill calculator
    CONSUMPTION_TOLERANCE: Decimal = Decimal("0.01")  # kWh
    TREND_DEADBAND_PERCENT: Decimal = Decimal("5")
    CONSUMPTION_SPIKE_PERCENT: Decimal = Decimal("20")
    ENERGY_GROUPS: list[EnergyGroup] = DEFAULT_ENERGY_GROUPS

    @field_validator("ENERGY_GROUPS")
    @classmethod
    def validate_group_ids(cls, v: list[EnergyGroup]) -> list[EnergyGroup]:
        """Validate that group ids are unique."""
        ids = [group.id for group in v]
        if len(set(ids)) != len(ids):
            raise ValueError("Energy group ids must be unique")
        return v


settings = Settings()
