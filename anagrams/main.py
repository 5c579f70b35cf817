"""Main entry point for the anagram counter."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from anagrams.config.environment import EnvironmentConfig
from anagrams.config.exceptions import ConfigurationError
from anagrams.config.loader import load_config
from anagrams.config.models import AppConfig
from anagrams.counting import AnagramScheduler
from anagrams.framework.exceptions import EmissionError, JobExecutionError, OutputError
from anagrams.logging import get_logger
from anagrams.logging.config import configure_logging

logger = get_logger(__name__, component="cli")

DIRECTORY_PROMPT = "Enter the path of the directory where the documents are stored: "


def load_runtime_config(
    config_path: Optional[Path], args: argparse.Namespace
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and apply overrides.

    Priority for every overridable setting: CLI > environment > config file.

    Args:
        config_path: Path to configuration file (None for the default lookup)
        args: Parsed command line arguments

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with overrides applied

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    overrides = {}
    for field, cli_value, env_value in (
        ("input_directory", args.directory, env_config.input_directory),
        ("output_file", args.output, env_config.output_file),
        ("workers", args.workers, env_config.workers),
    ):
        if cli_value is not None:
            overrides[field] = cli_value
        elif env_value is not None:
            overrides[field] = env_value

    if args.fail_fast:
        overrides["on_job_error"] = "raise"

    if args.log_level:
        overrides["logging"] = {**app_config.logging.model_dump(), "level": args.log_level}
    elif env_config.log_level:
        overrides["logging"] = {**app_config.logging.model_dump(), "level": env_config.log_level}

    if overrides:
        try:
            app_config = AppConfig.model_validate({**app_config.model_dump(), **overrides})
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid command line or environment override: {e}",
                suggestions=["Check --workers/ANAGRAMS_WORKERS and --output/ANAGRAMS_OUTPUT_FILE"],
            )

    env_config.log_level = app_config.logging.level
    return app_config, env_config


def resolve_input_directory(
    app_config: AppConfig, prompt: Optional[Callable[[str], str]] = None
) -> AppConfig:
    """Ask for the input directory when no other source provided one.

    Raises:
        ConfigurationError: If the answer is empty
    """
    if app_config.input_directory:
        return app_config

    try:
        answer = (prompt or input)(DIRECTORY_PROMPT).strip()
    except EOFError:
        answer = ""

    if not answer:
        raise ConfigurationError(
            "No input directory given",
            suggestions=[
                "Pass --directory DIR",
                "Set ANAGRAMS_INPUT_DIR or input_directory in config.yaml",
            ],
        )
    return app_config.model_copy(update={"input_directory": answer})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Anagram Counter - count the words sharing each anagram key in a directory of text files"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--directory",
        default=None,
        help="Directory containing the .txt files (prompted for if not configured)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output file (default: count_anagrams.txt in the working directory)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files processed concurrently (default: 1)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort on the first unreadable file instead of skipping it",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the anagram counter.

    Returns:
        Exit code: 0 on success, 1 on configuration, emission or output
        errors, or when any file could not be processed.
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args)

        configure_logging(
            level=app_config.logging.level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        app_config = resolve_input_directory(app_config)

        logger.info(
            "Anagram counter starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "input_directory": app_config.input_directory,
                "output_file": app_config.output_file,
                "workers": app_config.workers,
                "on_job_error": app_config.on_job_error,
            },
        )

        scheduler = AnagramScheduler.from_config(app_config)
        result = scheduler.execute_phases()

        print(f"Output written to {result.output_result}")
        if result.failures:
            print(
                f"{result.failed_job_count} of {result.job_count} files could not be read:",
                file=sys.stderr,
            )
            for failure in result.failures:
                print(f"  - {failure.job}: {failure.error_type}", file=sys.stderr)

        logger.info(
            f"Run completed: {result.job_count} files, "
            f"{result.pair_count} words, "
            f"{result.key_count} anagram keys",
            extra={
                "event": "service.completed",
                "duration_seconds": round(time.time() - start_time, 3),
                "had_errors": result.had_errors,
            },
        )
        return 1 if result.had_errors else 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except EmissionError as e:
        print(f"Cannot read input: {e}", file=sys.stderr)
        return 1
    except JobExecutionError as e:
        print(f"Aborted: {e}", file=sys.stderr)
        return 1
    except OutputError as e:
        print(
            f"Cannot write output: {e} ({len(e.grouped)} anagram keys were collected)",
            file=sys.stderr,
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
