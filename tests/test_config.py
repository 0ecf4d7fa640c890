"""Tests for settings loading."""

import json

import pytest

from shulkers.config import Settings, config_path, read_env_file
from shulkers.sources.spigot import SPIGET_URL

ENV_KEYS = (
    "SHULKERS_SPIGOT_URL",
    "SHULKERS_MODRINTH_URL",
    "SHULKERS_TIMEOUT",
    "SHULKERS_CACHE_TTL",
    "SHULKERS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the config dir at tmp_path and restore SHULKERS_* afterwards."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        # setenv first so teardown removes values written by .env loading
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


class TestReadEnvFile:
    def test_parses_lines(self, tmp_path):
        env = tmp_path / "sample.env"
        env.write_text(
            "# comment\n"
            "export SHULKERS_TIMEOUT=3\n"
            "SHULKERS_LOG_LEVEL='debug'\n"
            "not a pair\n",
            encoding="utf-8",
        )
        assert read_env_file(env) == {"SHULKERS_TIMEOUT": "3", "SHULKERS_LOG_LEVEL": "debug"}

    def test_missing_file(self, tmp_path):
        assert read_env_file(tmp_path / "absent") == {}


class TestSettings:
    """Tests for Settings.load and save."""

    def test_defaults(self):
        settings = Settings.load()
        assert settings.spigot_url == SPIGET_URL
        assert settings.cache_ttl_s == 300.0
        assert settings.search_limit == 10
        assert settings.info_limit == 5
        assert settings.log_level == "WARNING"

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        Settings(search_limit=25, fuzzy_threshold=0.1).save(path)

        loaded = Settings.load(path)
        assert loaded.search_limit == 25
        assert loaded.fuzzy_threshold == 0.1

    def test_default_path_is_in_config_dir(self, tmp_path):
        assert config_path() == tmp_path / "xdg" / "shulkers" / "config.json"

    def test_corrupt_file_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert Settings.load(path) == Settings()

    def test_invalid_values_fall_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"search_limit": "many"}), encoding="utf-8")
        assert Settings.load(path).search_limit == 10

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"timeout_s": 30}), encoding="utf-8")
        monkeypatch.setenv("SHULKERS_TIMEOUT", "5")
        monkeypatch.setenv("SHULKERS_MODRINTH_URL", "http://localhost:8080/v2")

        settings = Settings.load(path)
        assert settings.timeout_s == 5.0
        assert settings.modrinth_url == "http://localhost:8080/v2"

    def test_bad_env_number_ignored(self, monkeypatch):
        monkeypatch.setenv("SHULKERS_CACHE_TTL", "soon")
        assert Settings.load().cache_ttl_s == 300.0

    def test_dotenv_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("SHULKERS_LOG_LEVEL=debug\nSHULKERS_TIMEOUT=7\n", encoding="utf-8")
        monkeypatch.setenv("SHULKERS_TIMEOUT", "9")

        settings = Settings.load()
        assert settings.log_level == "DEBUG"
        assert settings.timeout_s == 9.0
