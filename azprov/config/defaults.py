# azprov/config/defaults.py
from typing import Dict, Any, Optional
from enum import Enum
import copy
import os
import json
import logging

from azprov.infrastructure.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "azureprov_config.json"

class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class LogDestination(str, Enum):
    """Log destination enumeration."""
    FILE = "file"
    STDOUT = "stdout"
    BOTH = "both"

DEFAULT_CONFIG = {
    # Azure provider configuration
    "AZURE_CREDENTIAL_FILE": "${AZURE_CREDENTIAL_FILE:}",
    "AZURE_REGION": "${AZURE_REGION:eastus}",
    "AZURE_SUBSCRIPTION_ID": "${AZURE_SUBSCRIPTION_ID:}",
    "AZURE_TENANT_ID": "${AZURE_TENANT_ID:}",
    "AZURE_CONNECTION_TIMEOUT_MS": 10000,
    "AZURE_REQUEST_RETRY_ATTEMPTS": 3,

    # Logging configuration
    "LOGGING_CONFIG": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file": {
            "path": "${AZPROV_LOGDIR:logs}/azprov.log",
            "max_size_mb": 10,
            "backup_count": 5
        }
    },

    # Validation ranges and rules
    "VALIDATION_RULES": {
        "required_fields": [
            "AZURE_REGION"
        ],
        "AZURE_REQUEST_RETRY_ATTEMPTS": {
            "min": 0,
            "max": 10,
            "type": "int"
        },
        "AZURE_CONNECTION_TIMEOUT_MS": {
            "min": 100,
            "max": 600000,
            "type": "int"
        }
    }
}

class ConfigurationManager:
    """
    Manages provider configuration with defaults and overrides.

    This class handles:
    - Loading default configuration
    - Applying user configuration file overrides
    - Applying environment variable overrides
    - Variable interpolation
    - Configuration validation
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager with defaults.

        Args:
            config_file: Optional path to configuration file. If not provided,
                        will look in AZPROV_CONFDIR/azureprov_config.json
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        # Load config file
        if config_file:
            self._load_config_file(config_file)
        else:
            default_config_path = os.path.join(
                os.environ.get('AZPROV_CONFDIR', ''),
                CONFIG_FILE_NAME
            )
            if os.path.exists(default_config_path):
                self._load_config_file(default_config_path)

        # Load environment variables (highest priority)
        self._load_env_vars()

        # Validate the final configuration
        self.validate_config()

    def _load_config_file(self, config_path: str) -> None:
        """Load configuration from file."""
        try:
            with open(config_path, 'r') as f:
                user_config = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}")
        logger.debug(f"Loaded configuration file {config_path}")
        self.update_config(user_config)

    def _load_env_vars(self) -> None:
        """Load and apply environment variable overrides."""
        direct_mappings = [
            "AZURE_CREDENTIAL_FILE",
            "AZURE_REGION",
            "AZURE_SUBSCRIPTION_ID",
            "AZURE_TENANT_ID",
            "AZURE_CONNECTION_TIMEOUT_MS",
            "AZURE_REQUEST_RETRY_ATTEMPTS",
        ]

        for env_var in direct_mappings:
            if env_var in os.environ:
                self._config[env_var] = os.environ[env_var]

    def _interpolate_values(self, config: Any) -> Any:
        """Interpolate ${VAR} and ${VAR:default} placeholders in configuration values."""
        if isinstance(config, str):
            if "${" not in config:
                return config
            start = config.index("${")
            end = config.find("}", start)
            if end == -1:
                return config
            var_name = config[start + 2:end]
            if ":" in var_name:
                var_name, default = var_name.split(":", 1)
                value = os.environ.get(var_name, default)
            else:
                value = os.environ.get(var_name, config[start:end + 1])
            return config[:start] + value + self._interpolate_values(config[end + 1:])
        elif isinstance(config, dict):
            return {k: self._interpolate_values(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._interpolate_values(v) for v in config]
        return config

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """
        Update configuration with user-provided values.

        Args:
            user_config: Configuration dictionary from user config file
        """
        def deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
            for key, value in source.items():
                if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                    deep_update(target[key], value)
                else:
                    target[key] = value

        deep_update(self._config, user_config)

    def get_config(self) -> Dict[str, Any]:
        """
        Get the complete configuration with all interpolations applied.

        Returns:
            Dict containing the complete configuration
        """
        return self._interpolate_values(self._config)

    def get_azure_config(self) -> 'AzureConfig':
        """Get the typed Azure provider configuration."""
        from azprov.config.schemas import AzureConfig
        return AzureConfig.from_dict(self.get_config())

    def get_logging_config(self) -> 'LoggingConfig':
        """Get the typed logging configuration."""
        from azprov.config.schemas import LoggingConfig
        return LoggingConfig.from_dict(self.get_config()["LOGGING_CONFIG"])

    def validate_config(self) -> None:
        """
        Validate the configuration.

        Validates:
        - Required fields are present
        - The credential file exists when one is configured
        - Log level and destination are known values
        - Retry and timeout settings are within bounds

        Raises:
            ConfigurationError: If configuration is invalid with detailed error messages
        """
        config = self.get_config()
        errors = []

        # Required fields validation
        for field in config["VALIDATION_RULES"]["required_fields"]:
            if not config.get(field):
                errors.append(f"{field} is required")

        # Optional file validation - only checked when provided
        cred_file = config.get("AZURE_CREDENTIAL_FILE")
        if cred_file:
            expanded_cred_file = os.path.expanduser(os.path.expandvars(cred_file))
            if not os.path.exists(expanded_cred_file):
                errors.append(f"AZURE_CREDENTIAL_FILE does not exist: {expanded_cred_file}")

        # Validate logging configuration using enums
        log_config = config["LOGGING_CONFIG"]
        log_level = log_config["level"].upper()
        if log_level not in LogLevel.__members__:
            errors.append(f"Invalid log level: {log_level}")

        log_dest = log_config["destination"].lower()
        try:
            LogDestination(log_dest)
        except ValueError:
            errors.append(f"Invalid log destination: {log_dest}. Must be one of: {', '.join(d.value for d in LogDestination)}")

        # Numeric validations - only for non-None values
        for field, rules in config["VALIDATION_RULES"].items():
            if isinstance(rules, dict) and rules.get("type") == "int":
                value = config.get(field)
                if value is not None:
                    try:
                        value = int(value)
                        if "min" in rules and value < rules["min"]:
                            errors.append(f"{field} must be at least {rules['min']}")
                        if "max" in rules and value > rules["max"]:
                            errors.append(f"{field} must be at most {rules['max']}")
                    except (TypeError, ValueError):
                        errors.append(f"{field} must be an integer")

        if errors:
            raise ConfigurationError("Invalid configuration:\n" + "\n".join(errors), details=errors)
