"""Application settings configuration."""

from pathlib import Path
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SERVICE_NAME = "urlshort"
SERVICE_VERSION = "0.1.0"

DEFAULT_REDIRECTS_FILE = Path("config") / "redirects.yaml"


def find_redirects_file(start: Optional[Path] = None) -> Optional[Path]:
    """Look for config/redirects.yaml in the start directory and its parents."""
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / DEFAULT_REDIRECTS_FILE
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


class Settings(BaseSettings):
    """Main application settings."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Application
    environment: str = Field(default="development", description="Deployment environment")
    host: str = Field(default="0.0.0.0", description="Bind address for the server")
    port: int = Field(default=8000, description="Bind port for the server")
    
    # Redirects
    redirects_file: Optional[str] = Field(default=None, description="YAML or JSON redirect rules file")
    redirects_strict: bool = Field(default=True, description="Abort startup on unreadable redirect rules")
    
    # Monitoring
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="json", description="json or console")
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Invalid log level: {v}")
        return level
    
    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log output format."""
        fmt = v.lower()
        if fmt not in ["json", "console"]:
            raise ValueError("Log format must be json or console")
        return fmt
    
    def resolve_redirects_file(self) -> Optional[Path]:
        """Return the configured rules file, or the discovered default."""
        if self.redirects_file:
            return Path(self.redirects_file)
        return find_redirects_file()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
