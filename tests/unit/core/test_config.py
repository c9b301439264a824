"""
Unit Tests for Configuration.

Tests environment settings, the connection config and YAML loading.
"""

from unittest.mock import patch

import pytest

from pihole_stats.core.config import (
    PiholeConfig,
    Settings,
    find_project_root,
    load_pihole_config,
    load_yaml_config,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove Pi-hole variables and any .env from the working directory."""
    for name in ("PIHOLE_URL", "PIHOLE_AUTH", "PIHOLE_STATS_URL", "PIHOLE_STATS_AUTH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    """Tests for environment-backed Settings."""

    def test_reads_pihole_variables(self, clean_env, monkeypatch):
        """Should read PIHOLE_URL and PIHOLE_AUTH."""
        monkeypatch.setenv("PIHOLE_URL", "http://pi.hole/admin")
        monkeypatch.setenv("PIHOLE_AUTH", "token")

        settings = Settings()

        assert settings.url == "http://pi.hole/admin"
        assert settings.auth == "token"

    def test_accepts_legacy_variable_names(self, clean_env, monkeypatch):
        """Should accept PIHOLE_STATS_URL and PIHOLE_STATS_AUTH."""
        monkeypatch.setenv("PIHOLE_STATS_URL", "http://10.0.0.2/admin")
        monkeypatch.setenv("PIHOLE_STATS_AUTH", "legacy")

        settings = Settings()

        assert settings.url == "http://10.0.0.2/admin"
        assert settings.auth == "legacy"

    def test_defaults_to_empty_strings(self, clean_env):
        """Should not fail when nothing is configured."""
        settings = Settings()

        assert settings.url == ""
        assert settings.auth == ""

    def test_reads_dotenv_file(self, clean_env, tmp_path):
        """Should read values from a .env file in the working directory."""
        (tmp_path / ".env").write_text("PIHOLE_URL=http://from-dotenv/admin\n")

        assert Settings().url == "http://from-dotenv/admin"


class TestLoadPiholeConfig:
    """Tests for load_pihole_config."""

    def test_uses_settings_values(self):
        """Should take URL and token from settings."""
        settings = Settings(PIHOLE_URL="http://pi.hole/admin", PIHOLE_AUTH="abc")

        config = load_pihole_config(settings=settings)

        assert config == PiholeConfig(base_url="http://pi.hole/admin", credential="abc")

    def test_explicit_values_override_settings(self):
        """Should prefer explicit arguments over settings."""
        settings = Settings(PIHOLE_URL="http://pi.hole/admin", PIHOLE_AUTH="abc")

        config = load_pihole_config(url="http://other/admin", auth="", settings=settings)

        assert config.base_url == "http://other/admin"
        assert config.credential == ""

    def test_repr_hides_credential(self):
        """Should never show the token in repr."""
        config = PiholeConfig(base_url="http://pi.hole/admin", credential="topsecret")

        assert "topsecret" not in repr(config)


class TestYamlConfig:
    """Tests for YAML loading helpers."""

    def test_find_project_root_locates_marker(self):
        """Should find the directory holding .project_root."""
        root = find_project_root()

        assert (root / ".project_root").exists()
        assert (root / "pihole_stats").is_dir()

    def test_load_yaml_config_reads_file(self, tmp_path):
        """Should parse YAML from config/settings."""
        config_dir = tmp_path / "config" / "settings"
        config_dir.mkdir(parents=True)
        (config_dir / "example.yaml").write_text("key: value\nnested:\n  n: 1\n")

        with patch("pihole_stats.core.config.find_project_root", return_value=tmp_path):
            data = load_yaml_config("example.yaml")

        assert data == {"key": "value", "nested": {"n": 1}}

    def test_load_yaml_config_empty_file(self, tmp_path):
        """Should return an empty dict for an empty file."""
        config_dir = tmp_path / "config" / "settings"
        config_dir.mkdir(parents=True)
        (config_dir / "empty.yaml").write_text("")

        with patch("pihole_stats.core.config.find_project_root", return_value=tmp_path):
            assert load_yaml_config("empty.yaml") == {}
