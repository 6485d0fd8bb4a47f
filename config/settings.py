"""
Settings Configuration
Pydantic-based configuration for the Hypatia client
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MIN_TIMEOUT_SECONDS = 1.0


class HypatiaSettings(BaseSettings):
    """Hypatia content-search API"""
    host: str = Field(default="http://hypatia.api.cnn.com/", description="API host, with trailing slash")
    route: str = Field(default="svc/content/v2/search/collection1/", description="search route, with trailing slash")
    timeout: float = Field(default=5.0, description="per-request timeout (seconds)")
    default_data_source: str = Field(default="cnn", description="dataSource used when a document has none")
    
    @field_validator("timeout")
    @classmethod
    def _clamp_timeout(cls, value: float) -> float:
        return max(MIN_TIMEOUT_SECONDS, value)
    
    model_config = SettingsConfigDict(env_prefix="HYPATIA_")


class FactorsSettings(BaseSettings):
    """Content factors (editorial override) lookup"""
    url: Optional[str] = Field(default=None, description="factors JSON URL")
    
    model_config = SettingsConfigDict(env_prefix="FACTORS_")


class LoggingSettings(BaseSettings):
    """Logging"""
    level: str = Field(default="INFO", description="log level name")
    use_rich: bool = Field(default=True, description="Rich console handler")
    file: Optional[str] = Field(default=None, description="log file name under logs/")
    
    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Top-level settings, aggregating the sections above"""
    
    hypatia: HypatiaSettings = Field(default_factory=HypatiaSettings)
    factors: FactorsSettings = Field(default_factory=FactorsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
    
    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """Load settings, reading the given .env file (default config/.env) first."""
        if env_path is None:
            env_path = Path(__file__).parent / ".env"
        
        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)
        
        return cls(
            hypatia=HypatiaSettings(),
            factors=FactorsSettings(),
            logging=LoggingSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings singleton"""
    return Settings.load_from_env_file()
