"""
Configuration loader with validation.

Builds a FrameDataConfig from environment variables (and a local .env file).
"""
from dotenv import load_dotenv
from .config import FrameDataConfig
from .config_validator import (
    get_bool_env,
    get_int_env,
    get_optional_env,
    validate_path,
    validate_threshold,
)
from .exceptions import ConfigurationError


def load_config_from_env(load_env_file: bool = True) -> FrameDataConfig:
    """
    Load configuration from environment variables with validation.
    
    Usage:
        config = load_config_from_env()
        service = FrameDataService(config)
        response = service.lookup("FILIA", "5lp")
    
    :param load_env_file: Whether to read a .env file first (local development)
    :return: Validated FrameDataConfig instance
    :raises: ConfigurationError if values are missing or invalid
    """
    if load_env_file:
        load_dotenv()
    
    try:
        fuzzy_threshold = float(get_optional_env("FUZZY_THRESHOLD", "0.6"))
    except ValueError:
        raise ConfigurationError("FUZZY_THRESHOLD must be a number.")
    
    config = FrameDataConfig(
        data_dir=get_optional_env("FRAME_DATA_DIR"),
        characters_sheet=get_optional_env("FRAME_DATA_CHARACTERS_SHEET", "Characters"),
        macros_sheet=get_optional_env("FRAME_DATA_MACROS_SHEET", "Macros"),
        macro_prefix=get_optional_env("FRAME_DATA_MACRO_PREFIX", "MACRO_"),
        max_query_length=get_int_env("MAX_QUERY_LENGTH", 100),
        enable_fuzzy_matching=get_bool_env("ENABLE_FUZZY_MATCHING", True),
        fuzzy_threshold=validate_threshold(fuzzy_threshold, "FUZZY_THRESHOLD"),
        fuzzy_scorer=get_optional_env("FUZZY_SCORER", "WRatio"),
        load_on_start=get_bool_env("LOAD_ON_START", True),
    )
    
    # A data directory is only mandatory when we are asked to load at startup
    if config.load_on_start or config.data_dir:
        validate_path(config.data_dir, "FRAME_DATA_DIR", must_exist=True)
    
    return config
