"""Configuration package with clean public API."""

from .defaults import DEFAULT_CONFIG, ConfigurationManager, LogDestination, LogLevel
from .schemas import AzureConfig, LogFileConfig, LoggingConfig

__all__ = [
    # Configuration management
    'ConfigurationManager',
    'DEFAULT_CONFIG',

    # Typed configurations
    'AzureConfig',
    'LoggingConfig',
    'LogFileConfig',

    # Enumerations
    'LogLevel',
    'LogDestination',
]
