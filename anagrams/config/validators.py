"""Soft checks on raw configuration that warn instead of failing."""

import os
import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for suspicious but valid values.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    workers = config_dict.get("workers", 1)
    cpu_count = os.cpu_count() or 1
    if isinstance(workers, int) and workers > cpu_count * 4:
        warning_messages.append(
            f"workers ({workers}) is far above the CPU count ({cpu_count}); "
            "extra threads will mostly wait on disk I/O"
        )

    min_word_length = config_dict.get("min_word_length", 4)
    if isinstance(min_word_length, int) and 1 <= min_word_length < 4:
        warning_messages.append(
            f"min_word_length ({min_word_length}) is below 4; short words will produce "
            "many trivial anagram groups"
        )

    on_job_error = config_dict.get("on_job_error")
    if on_job_error == "raise" and isinstance(workers, int) and workers > 1:
        warning_messages.append(
            "on_job_error is 'raise' with several workers; jobs already running "
            "when a file fails still finish before the run aborts"
        )

    # Default output file name ends in .txt, so scanning "." picks it up next run
    input_directory = config_dict.get("input_directory")
    output_file = config_dict.get("output_file", "count_anagrams.txt")
    file_suffix = config_dict.get("file_suffix", ".txt")
    if (
        isinstance(input_directory, str)
        and isinstance(output_file, str)
        and isinstance(file_suffix, str)
        and input_directory.strip() in (".", "./")
        and not os.path.dirname(output_file.strip())
        and output_file.strip().lower().endswith(file_suffix.strip().lower())
    ):
        warning_messages.append(
            f"output_file ({output_file}) is written into the input directory and matches "
            f"file_suffix ({file_suffix}); it will be counted on the next run"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message through the warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
