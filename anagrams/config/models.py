"""Configuration schema models using Pydantic."""

import codecs
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from anagrams.framework.models import JobFailurePolicy


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "extra": "forbid"}


class AppConfig(BaseModel):
    """Root configuration object for the anagram counter."""

    input_directory: Optional[str] = Field(
        None, description="Directory containing the text files (prompted for if unset)"
    )
    output_file: str = Field(
        "count_anagrams.txt", min_length=1, description="File the counts are written to"
    )
    file_suffix: str = Field(".txt", description="Suffix selecting input files (case-insensitive)")
    encoding: str = Field("utf-8", description="Encoding of the input files")
    min_word_length: int = Field(4, ge=1, le=64, description="Shortest word that is counted")
    workers: int = Field(1, ge=1, le=64, description="Files processed concurrently")
    on_job_error: JobFailurePolicy = Field(
        JobFailurePolicy.RECORD,
        description="record: log unreadable files and continue; raise: abort the run",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = {"use_enum_values": True, "extra": "forbid"}

    @field_validator("input_directory")
    @classmethod
    def strip_directory(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank directory as unset."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @field_validator("output_file")
    @classmethod
    def strip_output_file(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("output_file cannot be empty or whitespace-only")
        return stripped

    @field_validator("file_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Suffixes are compared lower-cased and must look like an extension."""
        stripped = v.strip().lower()
        if not stripped.startswith(".") or len(stripped) < 2:
            raise ValueError(f"file_suffix must start with '.', e.g. '.txt' (got {v!r})")
        return stripped

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v
