"""Application configuration models."""

from typing import Optional

from pydantic import BaseModel, Field

from .algorithms import SignatureAlgorithm


class LoggingSettings(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


class RequestDefaults(BaseModel):
    """Defaults for new certificate requests."""

    # Unknown means: pick by key type
    signature_algorithm: SignatureAlgorithm = Field(default_factory=SignatureAlgorithm)


class AppConfig(BaseModel):
    """Main application configuration."""

    logging: LoggingSettings = LoggingSettings()
    requests: RequestDefaults = RequestDefaults()
