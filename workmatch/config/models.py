"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from workmatch.matching.engine import MATCH_SCORE_THRESHOLD, MAX_MATCH_RESULTS


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class MatchingConfig(BaseModel):
    """Ranking threshold and result cap."""

    min_score: int = Field(
        MATCH_SCORE_THRESHOLD,
        ge=0,
        le=99,
        description="Only candidates scoring strictly above this are returned",
    )
    max_results: int = Field(
        MAX_MATCH_RESULTS, ge=1, le=100, description="Maximum matches returned per request"
    )
    include_unavailable_workers: bool = Field(
        False,
        description="Rank unavailable workers for a job too (they still lose the availability points)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        """Accept level names in any case."""
        return v.strip().upper() if isinstance(v, str) else v

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for WorkMatch."""

    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Ranking settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = {"extra": "forbid"}
