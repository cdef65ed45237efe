"""
Configuration management for the Fight Scout report parser.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


class ParsingConfig(BaseModel):
    """Limits and switches for report extraction."""
    summary_max_chars: int = 1500
    summary_min_boundary: int = 500  # Sentence cut must land past this offset
    game_plan_max_chars: int = 1500
    max_techniques: int = 5
    max_improvements: int = 10
    critical_warning_threshold: int = 5  # More critical findings than this triggers a warning
    normalize_markdown: bool = True

    @field_validator('summary_max_chars', 'game_plan_max_chars', 'max_techniques', 'max_improvements')
    @classmethod
    def positive_limit(cls, v):
        if v < 1:
            raise ValueError('Limits must be at least 1')
        return v


class LoggingConfig(BaseModel):
    """Configuration for loguru output."""
    level: str = "INFO"
    format: str = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>"
    serialize: bool = False  # Emit JSON lines instead of the colored format

    @field_validator('level')
    @classmethod
    def upper_level(cls, v):
        return (v or "INFO").upper()


class AppConfig(BaseSettings):
    """Main application configuration."""
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='FIGHTSCOUT_',
        env_nested_delimiter='__',
        extra='ignore',
    )

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Create configuration from environment variables."""
        config = cls()

        if os.getenv('FIGHTSCOUT_LOG_LEVEL'):
            config.logging.level = os.getenv('FIGHTSCOUT_LOG_LEVEL').upper()
        if os.getenv('FIGHTSCOUT_LOG_SERIALIZE'):
            config.logging.serialize = os.getenv('FIGHTSCOUT_LOG_SERIALIZE').lower() == 'true'
        if os.getenv('FIGHTSCOUT_NORMALIZE_MARKDOWN'):
            config.parsing.normalize_markdown = os.getenv('FIGHTSCOUT_NORMALIZE_MARKDOWN').lower() == 'true'

        for key_env, attr in [
            ('FIGHTSCOUT_SUMMARY_MAX_CHARS', 'summary_max_chars'),
            ('FIGHTSCOUT_SUMMARY_MIN_BOUNDARY', 'summary_min_boundary'),
            ('FIGHTSCOUT_GAME_PLAN_MAX_CHARS', 'game_plan_max_chars'),
            ('FIGHTSCOUT_MAX_TECHNIQUES', 'max_techniques'),
            ('FIGHTSCOUT_MAX_IMPROVEMENTS', 'max_improvements'),
            ('FIGHTSCOUT_CRITICAL_WARNING_THRESHOLD', 'critical_warning_threshold'),
        ]:
            if os.getenv(key_env):
                try:
                    setattr(config.parsing, attr, int(os.getenv(key_env)))
                except ValueError:
                    # Keep the default rather than refusing to boot
                    pass

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> 'AppConfig':
        """Create configuration from YAML file."""
        import yaml

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'parsing': self.parsing.model_dump(),
            'logging': self.logging.model_dump(),
        }


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
