"""
Configuration validation utilities.

Small helpers for reading and checking environment-provided settings.
"""
import os
from typing import Optional
from .exceptions import ConfigurationError


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.
    
    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    return os.getenv(key, default)


def get_bool_env(key: str, default: bool) -> bool:
    """
    Read a boolean flag ("true"/"false", case-insensitive).
    
    :raises: ConfigurationError if the value is not a recognised boolean
    """
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    
    raise ConfigurationError(f"{key} must be 'true' or 'false', got '{value}'.")


def get_int_env(key: str, default: int, minimum: int = 1) -> int:
    """
    Read a positive integer setting.
    
    :raises: ConfigurationError if the value is not an integer >= minimum
    """
    value = get_optional_env(key)
    if value is None or value == "":
        return default
    
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'.")
    
    if parsed < minimum:
        raise ConfigurationError(f"{key} must be at least {minimum}, got {parsed}.")
    
    return parsed


def validate_threshold(value: float, name: str) -> float:
    """
    Validate a similarity threshold in the range 0.0-1.0.
    
    :param value: Threshold to validate
    :param name: Name of the setting (for error messages)
    :return: Validated threshold
    :raises: ConfigurationError if out of range
    """
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(
            f"{name} must be between 0.0 and 1.0, got {value}."
        )
    return value


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate file/directory path.
    
    :param path: Path to validate
    :param path_name: Name of the path (for error messages)
    :param must_exist: Whether path must exist
    :return: Validated path
    :raises: ConfigurationError if invalid
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")
    
    if must_exist and not os.path.exists(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Please check the path and ensure the directory exists."
        )
    
    return path
