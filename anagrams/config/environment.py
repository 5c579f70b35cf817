"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        input_directory: Optional[str] = None,
        output_file: Optional[str] = None,
        workers: Optional[int] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.input_directory = input_directory
        self.output_file = output_file
        self.workers = workers
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional; when set they override the config file:
    - ANAGRAMS_INPUT_DIR: Directory containing the text files
    - ANAGRAMS_OUTPUT_FILE: Output file path
    - ANAGRAMS_WORKERS: Number of files processed concurrently (1-64)
    - LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to log records (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    input_directory = os.getenv("ANAGRAMS_INPUT_DIR") or None
    output_file = os.getenv("ANAGRAMS_OUTPUT_FILE") or None
    workers_str = os.getenv("ANAGRAMS_WORKERS")
    log_level = os.getenv("LOG_LEVEL") or None
    environment = os.getenv("ENVIRONMENT") or None

    workers = None
    if workers_str:
        try:
            workers = int(workers_str)
            if workers < 1 or workers > 64:
                errors.append(f"Invalid ANAGRAMS_WORKERS: {workers}. Must be between 1 and 64.")
        except ValueError:
            errors.append(f"Invalid ANAGRAMS_WORKERS: '{workers_str}'. Must be a valid integer.")

    if log_level:
        log_level = log_level.upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        input_directory=input_directory,
        output_file=output_file,
        workers=workers,
        log_level=log_level,
        environment=environment,
    )
