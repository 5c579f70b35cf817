"""Tests for the configuration module."""

from pathlib import Path

import pytest

from anagrams.config import (
    AppConfig,
    ConfigurationError,
    load_config,
    load_environment_config,
    validate_config_file,
)
from anagrams.config.validators import check_for_warnings

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "configs"


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self):
        app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.input_directory == "./documents"
        assert app_config.output_file == "results/counts.txt"
        assert app_config.file_suffix == ".txt"  # lower-cased
        assert app_config.encoding == "utf-8"
        assert app_config.min_word_length == 5
        assert app_config.workers == 4
        assert app_config.on_job_error == "raise"
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert env_config.environment == "local"

    def test_load_minimal_config_applies_defaults(self):
        app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.input_directory == "/srv/documents"
        assert app_config.output_file == "count_anagrams.txt"
        assert app_config.file_suffix == ".txt"
        assert app_config.min_word_length == 4
        assert app_config.workers == 1
        assert app_config.on_job_error == "record"
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"

    def test_empty_file_means_defaults(self):
        app_config, _ = load_config(FIXTURES_DIR / "empty_config.yaml")
        assert app_config == AppConfig()

    def test_no_config_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        app_config, _ = load_config()
        assert app_config.input_directory is None
        assert app_config.output_file == "count_anagrams.txt"

    def test_default_locations_are_searched(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("input_directory: /from/subdir\n")

        app_config, _ = load_config()
        assert app_config.input_directory == "/from/subdir"

        (tmp_path / "config.yaml").write_text("input_directory: /from/cwd\n")
        app_config, _ = load_config()
        assert app_config.input_directory == "/from/cwd"

    def test_explicit_file_not_found(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value).lower()
        assert "Suggestions:" in str(exc_info.value)

    def test_invalid_yaml_syntax(self, tmp_path):
        invalid_yaml = tmp_path / "invalid.yaml"
        invalid_yaml.write_text("input_directory: 'unterminated\n  workers: [")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(invalid_yaml)

    def test_non_mapping_config(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config(config_file)

    def test_invalid_values_are_all_reported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_values_config.yaml")

        errors = exc_info.value.errors
        assert len(errors) == 4
        joined = "\n".join(errors)
        assert "workers" in joined
        assert "file_suffix" in joined
        assert "on_job_error" in joined
        assert "Unknown encoding" in joined
        assert "Validation Errors:" in str(exc_info.value)

    def test_unknown_field_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "unknown_field_config.yaml")

        assert exc_info.value.errors == ["Unknown field: scan_interval"]

    def test_invalid_type(self, tmp_path):
        config_file = tmp_path / "bad_type.yaml"
        config_file.write_text("workers: many\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Invalid type for 'workers'" in exc_info.value.errors[0]


class TestAppConfigModel:
    def test_blank_directory_is_unset(self):
        assert AppConfig(input_directory="   ").input_directory is None

    def test_directory_is_stripped(self):
        assert AppConfig(input_directory=" /data ").input_directory == "/data"

    @pytest.mark.parametrize("suffix", ["txt", ".", ""])
    def test_bad_suffix(self, suffix):
        with pytest.raises(ValueError):
            AppConfig(file_suffix=suffix)

    @pytest.mark.parametrize("field,value", [("workers", 65), ("min_word_length", 0)])
    def test_out_of_range(self, field, value):
        with pytest.raises(ValueError):
            AppConfig(**{field: value})

    def test_blank_output_file(self):
        with pytest.raises(ValueError):
            AppConfig(output_file="   ")


class TestEnvironmentConfig:
    def test_defaults(self):
        env_config = load_environment_config()

        assert env_config.input_directory is None
        assert env_config.output_file is None
        assert env_config.workers is None
        assert env_config.log_level is None
        assert env_config.environment == "local"

    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("ANAGRAMS_INPUT_DIR", "/data/books")
        monkeypatch.setenv("ANAGRAMS_OUTPUT_FILE", "/tmp/out.txt")
        monkeypatch.setenv("ANAGRAMS_WORKERS", "8")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("ENVIRONMENT", "ci")

        env_config = load_environment_config()

        assert env_config.input_directory == "/data/books"
        assert env_config.output_file == "/tmp/out.txt"
        assert env_config.workers == 8
        assert env_config.log_level == "WARNING"
        assert env_config.environment == "ci"

    def test_invalid_values(self, monkeypatch):
        monkeypatch.setenv("ANAGRAMS_WORKERS", "lots")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2

    def test_workers_out_of_range(self, monkeypatch):
        monkeypatch.setenv("ANAGRAMS_WORKERS", "0")
        with pytest.raises(ConfigurationError, match="ANAGRAMS_WORKERS"):
            load_environment_config()

    def test_load_config_propagates_environment_errors(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigurationError, match="Environment variable validation failed"):
            load_config(FIXTURES_DIR / "minimal_config.yaml")


class TestWarnings:
    def test_no_warnings_for_defaults(self):
        assert check_for_warnings({}) == []

    def test_short_words_warned(self):
        warnings = check_for_warnings({"min_word_length": 2})
        assert any("min_word_length" in w for w in warnings)

    def test_output_inside_scanned_directory_warned(self):
        warnings = check_for_warnings({"input_directory": "."})
        assert any("counted on the next run" in w for w in warnings)

    def test_fail_fast_with_workers_warned(self):
        warnings = check_for_warnings({"workers": 2, "on_job_error": "raise"})
        assert any("on_job_error" in w for w in warnings)

    def test_warnings_are_emitted_on_load(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("min_word_length: 3\n")

        with pytest.warns(UserWarning, match="min_word_length"):
            load_config(config_file)


class TestValidateConfigFile:
    def test_valid(self, capsys):
        assert validate_config_file(FIXTURES_DIR / "valid_config.yaml") is True
        assert "is valid" in capsys.readouterr().out

    def test_invalid(self, capsys):
        assert validate_config_file(FIXTURES_DIR / "invalid_values_config.yaml") is False
        assert "validation failed" in capsys.readouterr().out


class TestConfigurationError:
    def test_renders_numbered_errors_and_suggestions(self):
        error = ConfigurationError(
            "Configuration validation failed",
            errors=["workers: too small", "Unknown field: scan_interval"],
            suggestions=["Review config.example.yaml"],
        )

        assert str(error) == (
            "Configuration validation failed\n"
            "\nValidation Errors:\n"
            "  1. workers: too small\n"
            "  2. Unknown field: scan_interval\n"
            "\nSuggestions:\n"
            "  - Review config.example.yaml"
        )

    def test_message_only(self):
        assert str(ConfigurationError("No input directory given")) == "No input directory given"
