"""Unit tests for configuration settings model.

Tests verify that the Settings model binds CONFINEMENT_* environment variables,
falls back to the documented defaults and exposes grouped configuration models.
"""

from pathlib import Path

import pytest

from confinement.core.config import HostConfig, LoggingConfig, Settings

_ENV_VARS = (
    "CONFINEMENT_LOG_LEVEL",
    "CONFINEMENT_LOG_FORMAT",
    "CONFINEMENT_ENABLE_FILE_LOGGING",
    "CONFINEMENT_LOG_FILE_DIR",
    "CONFINEMENT_SEARCH_PATH",
    "CONFINEMENT_FACT_ENV_PREFIX",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Remove CONFINEMENT_* variables and run from a directory without a .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def env_example_vars() -> dict[str, str]:
    """Parse the repository .env.example file."""
    path = Path(__file__).resolve().parents[3] / ".env.example"
    env_vars = {}
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                env_vars[key.strip()] = value.strip()
    return env_vars


class TestSettingsDefaults:
    """Test defaults when nothing is configured."""

    def test_defaults(self, clean_env):
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "detailed"
        assert settings.enable_file_logging is False
        assert settings.log_file_dir == "logs"
        assert settings.search_path is None
        assert settings.fact_env_prefix == "FACTER_"

    def test_env_example_matches_defaults(self, clean_env, env_example_vars):
        """Every documented variable is known and documents the default."""
        defaults = Settings().model_dump(by_alias=True)
        for key, value in env_example_vars.items():
            assert key in _ENV_VARS
            assert str(defaults[key]).lower() == value.lower()


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_log_level_binding(self, clean_env):
        clean_env.setenv("CONFINEMENT_LOG_LEVEL", "DEBUG")
        assert Settings().log_level == "DEBUG"

    def test_enable_file_logging_binding(self, clean_env):
        clean_env.setenv("CONFINEMENT_ENABLE_FILE_LOGGING", "true")
        assert Settings().enable_file_logging is True

    def test_search_path_binding(self, clean_env):
        clean_env.setenv("CONFINEMENT_SEARCH_PATH", "/opt/bin:/usr/bin")
        assert Settings().search_path == "/opt/bin:/usr/bin"

    def test_fact_env_prefix_binding(self, clean_env):
        clean_env.setenv("CONFINEMENT_FACT_ENV_PREFIX", "HOSTFACT_")
        assert Settings().fact_env_prefix == "HOSTFACT_"

    def test_dotenv_file_is_read(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("CONFINEMENT_LOG_FORMAT=json\n")
        assert Settings().log_format == "json"

    def test_environment_wins_over_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("CONFINEMENT_LOG_FORMAT=json\n")
        clean_env.setenv("CONFINEMENT_LOG_FORMAT", "simple")
        assert Settings().log_format == "simple"


class TestGroupedConfig:
    """Test the grouped configuration properties."""

    def test_logging_group(self, clean_env):
        clean_env.setenv("CONFINEMENT_LOG_FORMAT", "simple")
        logging_config = Settings().logging

        assert isinstance(logging_config, LoggingConfig)
        assert logging_config.format == "simple"
        assert logging_config.level == "INFO"
        assert logging_config.enable_file is False

    def test_host_group(self, clean_env):
        clean_env.setenv("CONFINEMENT_SEARCH_PATH", "/opt/bin")
        host_config = Settings().host

        assert isinstance(host_config, HostConfig)
        assert host_config.search_path == "/opt/bin"
        assert host_config.fact_env_prefix == "FACTER_"

    def test_group_models_accept_field_names(self):
        assert HostConfig(fact_env_prefix="X_").fact_env_prefix == "X_"
        assert LoggingConfig(level="ERROR").level == "ERROR"
