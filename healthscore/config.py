"""Application configuration with validation."""
from typing import Optional, Literal, List
from functools import lru_cache
from pydantic import Field, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


# Ethics firewall - company names / descriptions containing any of these are excluded
DEFAULT_ETHICS_KEYWORDS: List[str] = [
    "tobacco",
    "weapons",
    "gambling",
    "casino",
    "philip morris",
    "altria",
    "firearms",
    "defense contractor",
    "raytheon",
    "lockheed",
    "northrop",
]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Stock Health Score"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Redis (evidence store + score cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0, gt=0, le=60)
    EVIDENCE_KEY_PREFIX: str = "evidence:"
    SCORE_KEY_PREFIX: str = "stock:"
    CACHE_TTL_SCORES: int = 3600  # 1 hour

    # Alpha Vantage market data
    ALPHA_VANTAGE_KEY: Optional[SecretStr] = None
    ALPHA_VANTAGE_URL: str = "https://www.alphavantage.co/query"
    HTTP_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0, le=120)

    # Evidence aggregation
    EVIDENCE_CAP: int = Field(default=10, ge=0, le=100)
    EVIDENCE_DISPLAY_LIMIT: int = Field(default=3, ge=0, le=20)
    EVIDENCE_DISPLAY_ORDER: Literal["significance", "input"] = "significance"
    EVIDENCE_MIN_DECAY_MONTHS: int = Field(default=6, ge=1, le=120)

    # Composite weights
    W_GROWTH: float = Field(default=0.30, ge=0.0, le=1.0)
    W_VALUE: float = Field(default=0.25, ge=0.0, le=1.0)
    W_HEALTH: float = Field(default=0.25, ge=0.0, le=1.0)
    W_MOMENTUM: float = Field(default=0.20, ge=0.0, le=1.0)

    # Action thresholds
    BUY_THRESHOLD: int = Field(default=70, ge=0, le=100)
    HOLD_THRESHOLD: int = Field(default=50, ge=0, le=100)

    ETHICS_KEYWORDS: List[str] = Field(default_factory=lambda: list(DEFAULT_ETHICS_KEYWORDS))

    @model_validator(mode="after")
    def validate_composite_weights(self):
        """Validate composite weights sum to 1.0."""
        total = sum(self.composite_weights.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Composite weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def validate_thresholds(self):
        if self.HOLD_THRESHOLD >= self.BUY_THRESHOLD:
            raise ValueError(
                f"HOLD_THRESHOLD ({self.HOLD_THRESHOLD}) must be below "
                f"BUY_THRESHOLD ({self.BUY_THRESHOLD})"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has the settings it cannot run without."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.ALPHA_VANTAGE_KEY is None:
                raise ValueError("ALPHA_VANTAGE_KEY required in production")
        return self

    @property
    def composite_weights(self) -> dict:
        """Get composite dimension weights keyed by dimension name."""
        return {
            "growth": self.W_GROWTH,
            "value": self.W_VALUE,
            "health": self.W_HEALTH,
            "momentum": self.W_MOMENTUM,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
