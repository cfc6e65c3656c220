"""
Configuration management for TalentMatch.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "talentmatch"
    username: str | None = None
    password: str | None = None


class MLSettings(BaseSettings):
    """Embedding model configuration."""

    model_config = SettingsConfigDict(env_prefix="ML_")

    # Which embedding backend to use
    provider: Literal["sentence-transformers", "openai"] = "sentence-transformers"

    # Local sentence-transformers model
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # Hosted embedding API
    openai_embedding_model: str = "text-embedding-3-small"
    openai_api_key: str | None = None
    request_timeout: float = 30.0

    # Device settings
    device: Literal["cpu", "cuda", "mps", "auto"] = "auto"

    # Batch processing
    batch_size: int = 32

    # ~4 characters per token, 3072 token input window
    max_input_chars: int = 3072 * 4

    @field_validator("device")
    @classmethod
    def validate_device(cls, v: str) -> str:
        """Auto-detect device if set to auto."""
        if v == "auto":
            try:
                import torch

                if torch.cuda.is_available():
                    return "cuda"
                elif torch.backends.mps.is_available():
                    return "mps"
            except ImportError:
                pass
            return "cpu"
        return v

    @property
    def active_model(self) -> str:
        """Name of the model used by the configured provider."""
        if self.provider == "openai":
            return self.openai_embedding_model
        return self.embedding_model


class MatchingSettings(BaseSettings):
    """Match scoring configuration."""

    model_config = SettingsConfigDict(env_prefix="MATCH_")

    semantic_weight: float = Field(default=0.5, ge=0.0, le=1.0)
    skills_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    experience_weight: float = Field(default=0.2, ge=0.0, le=1.0)

    # Defaults for ranking candidates/jobs
    default_top_n: int = Field(default=20, ge=1, le=100)
    default_min_score: int = Field(default=60, ge=0, le=100)

    @model_validator(mode="after")
    def validate_weights(self) -> "MatchingSettings":
        """Weights must describe a weighted average."""
        total = self.semantic_weight + self.skills_weight + self.experience_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Match weights must sum to 1.0, got {total:.3f}")
        return self

    @property
    def weights(self) -> dict[str, float]:
        return {
            "semantic": self.semantic_weight,
            "skills": self.skills_weight,
            "experience": self.experience_weight,
        }


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "talentmatch.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "TalentMatch"
    version: str = "0.1.0"
    description: str = "Candidate-job AI match scoring"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ml: MLSettings = Field(default_factory=MLSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
