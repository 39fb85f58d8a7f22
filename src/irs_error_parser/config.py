"""
Configuration management using Pydantic Settings.

Two configuration sources:
- config/report.yaml: output report layout (columns, delimiter, encoding)
- Environment variables / .env: parser and matching behavior

Both are exposed as lazy-loaded singletons (get_report_config(),
get_app_config()).
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from irs_error_parser.validators import validate_boundary_policy, validate_lookup_strategy

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = ['ID', 'Error', 'First Name', 'Last Name']


class ReportConfig(BaseSettings):
    """
    Output report layout loaded from config/report.yaml.
    
    Attributes:
        columns: Header row, one name per output column (exactly four)
        delimiter: Field delimiter
        encoding: Output file encoding
    
    Example:
        >>> config = ReportConfig()
        >>> config.columns
        ['ID', 'Error', 'First Name', 'Last Name']
    """
    
    columns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_COLUMNS),
        min_length=4,
        max_length=4,
        description="Header names for ID, Error, First Name, Last Name"
    )
    delimiter: str = Field(
        default=',',
        min_length=1,
        max_length=1,
        description="Single-character field delimiter"
    )
    encoding: str = Field(
        default='utf-8',
        description="Output file encoding"
    )
    
    model_config = SettingsConfigDict(
        env_prefix='REPORT_',
        extra='ignore'
    )
    
    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Fill in values from config/report.yaml.
        
        Explicit values (constructor arguments, REPORT_* environment
        variables) take precedence key by key; the YAML file supplies the
        rest. Falls back to the built-in layout when the file cannot be
        found (e.g. when running from outside the project root).
        """
        current_file = Path(__file__)
        project_root = current_file.parent.parent.parent  # src/irs_error_parser/config.py -> root
        config_path = project_root / 'config' / 'report.yaml'
        
        if not config_path.exists():
            config_path = Path('config/report.yaml')
        
        if not config_path.exists():
            logger.warning("config/report.yaml not found, using default report layout")
            return data
        
        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}
        
        merged = {
            key: yaml_data[key]
            for key in ('columns', 'delimiter', 'encoding')
            if key in yaml_data
        }
        merged.update(data or {})
        return merged


# Singleton pattern - loaded once, cached forever
_report_config: Optional[ReportConfig] = None


def get_report_config() -> ReportConfig:
    """
    Get global report layout config (lazy-loaded singleton).
    
    Returns:
        Singleton ReportConfig instance
    """
    global _report_config
    if _report_config is None:
        _report_config = ReportConfig()
    return _report_config


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.
    
    Environment Variables (from .env):
        PARSER_CHUNK_SIZE: Bytes fed to the XML parser per read
        TRIM_TEXT: Strip text nodes and skip whitespace-only ones
        BOUNDARY_POLICY: 'last_field' or 'repeat_sentinel'
        LOOKUP_STRATEGY: 'index', 'sorted' or 'linear'
        LOG_LEVEL: Logging level for the command line
    
    Example:
        >>> config = get_app_config()
        >>> config.boundary_policy
        'last_field'
    """
    
    parser_chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Bytes read from the input file per parser feed"
    )
    
    trim_text: bool = Field(
        default=True,
        description="Strip text nodes; whitespace-only text produces no event"
    )
    
    boundary_policy: str = Field(
        default='last_field',
        description="Record boundary policy (last_field | repeat_sentinel)"
    )
    
    lookup_strategy: str = Field(
        default='index',
        description="Name lookup strategy (index | sorted | linear)"
    )
    
    log_level: str = Field(
        default='INFO',
        description="Logging level used by the command line"
    )
    
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )
    
    @field_validator('boundary_policy')
    @classmethod
    def check_boundary_policy(cls, v: str) -> str:
        return validate_boundary_policy(v)
    
    @field_validator('lookup_strategy')
    @classmethod
    def check_lookup_strategy(cls, v: str) -> str:
        return validate_lookup_strategy(v)
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize to an upper-case stdlib logging level name."""
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown log level: '{v}'")
        return level


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """
    Get global application config instance (lazy-loaded singleton).
    
    Returns:
        Singleton AppConfig instance
    
    Example:
        >>> config = get_app_config()
        >>> config is get_app_config()
        True
    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
