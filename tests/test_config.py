"""Tests for settings and .env loading."""

import json
import os
import pytest
from pathlib import Path

from wacatalog.config import Settings, config_dir
from wacatalog.env import load_env_files, parse_env_file
from wacatalog.urls import normalize_api_version, root_url

ENV_KEYS = [
    "WACATALOG_BASE_URL",
    "WACATALOG_API_VERSION",
    "WACATALOG_BUSINESS_ID",
    "WACATALOG_ACCESS_TOKEN",
    "WHATSAPP_ACCESS_TOKEN",
    "WACATALOG_TIMEOUT",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the real config dir, cwd .env and environment out of the tests."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, tmp_path):
        s = Settings.load(tmp_path / "missing.json")
        assert s.base_url == "https://graph.facebook.com"
        assert s.api_version == "v21.0"
        assert s.business_id == ""
        assert s.access_token == ""
        assert s.timeout_s == 30
        assert s.is_configured() is False

    def test_config_dir_uses_xdg(self, tmp_path):
        assert config_dir() == tmp_path / "xdg" / "wacatalog"

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        Settings(business_id="biz", access_token="tok", api_version="v20.0", timeout_s=5).save(path)

        loaded = Settings.load(path)
        assert loaded.business_id == "biz"
        assert loaded.access_token == "tok"
        assert loaded.api_version == "v20.0"
        assert loaded.timeout_s == 5
        assert loaded.is_configured() is True

    def test_corrupt_file_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert Settings.load(path).business_id == ""

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        Settings(business_id="file-biz", access_token="file-tok").save(path)

        monkeypatch.setenv("WACATALOG_BUSINESS_ID", "env-biz")
        monkeypatch.setenv("WHATSAPP_ACCESS_TOKEN", "wa-tok")
        monkeypatch.setenv("WACATALOG_API_VERSION", "19.0")
        monkeypatch.setenv("WACATALOG_TIMEOUT", "7")

        s = Settings.load(path)
        assert s.business_id == "env-biz"
        assert s.access_token == "wa-tok"
        assert s.api_version == "v19.0"
        assert s.timeout_s == 7

    def test_specific_token_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WHATSAPP_ACCESS_TOKEN", "wa-tok")
        monkeypatch.setenv("WACATALOG_ACCESS_TOKEN", "cat-tok")
        assert Settings.load(tmp_path / "none.json").access_token == "cat-tok"

    def test_bad_timeout_env_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WACATALOG_TIMEOUT", "soon")
        assert Settings.load(tmp_path / "none.json").timeout_s == 30

    def test_dotenv_in_cwd(self, tmp_path):
        (tmp_path / ".env").write_text("WACATALOG_BUSINESS_ID=dotenv-biz\n", encoding="utf-8")
        try:
            assert Settings.load(tmp_path / "none.json").business_id == "dotenv-biz"
        finally:
            os.environ.pop("WACATALOG_BUSINESS_ID", None)

    def test_account(self):
        s = Settings(business_id="biz", access_token="tok", api_version="v21.0")
        account = s.account()
        assert account.business_id == "biz"
        assert account.access_token == "tok"
        assert account.api_version == "v21.0"


class TestUrls:
    """Tests for URL normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("", "https://graph.facebook.com"),
        ("graph.example.com", "https://graph.example.com"),
        ("https://graph.example.com/", "https://graph.example.com"),
        ("https://graph.example.com/v21.0", "https://graph.example.com"),
        ("http://localhost:8080", "http://localhost:8080"),
    ])
    def test_root_url(self, raw, expected):
        assert root_url(raw) == expected

    @pytest.mark.parametrize("raw,expected", [("v21.0", "v21.0"), ("21.0", "v21.0"), ("/v20.0/", "v20.0"), ("", "")])
    def test_normalize_api_version(self, raw, expected):
        assert normalize_api_version(raw) == expected


class TestEnvFiles:
    """Tests for the .env loader."""

    def test_parse_env_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text(
            "# comment\n"
            "\n"
            "export WACATALOG_BUSINESS_ID=123\n"
            "WACATALOG_ACCESS_TOKEN=\"quoted token\"\n"
            "SINGLE='x'\n"
            "NO_EQUALS\n",
            encoding="utf-8",
        )
        result = parse_env_file(path)
        assert result == {
            "WACATALOG_BUSINESS_ID": "123",
            "WACATALOG_ACCESS_TOKEN": "quoted token",
            "SINGLE": "x",
        }

    def test_missing_file(self, tmp_path):
        assert parse_env_file(tmp_path / "nope") == {}

    def test_existing_env_not_overwritten(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WACATALOG_BUSINESS_ID", "already")
        (tmp_path / ".env").write_text("WACATALOG_BUSINESS_ID=from-file\n", encoding="utf-8")

        load_env_files(tmp_path / "cfg")

        assert os.environ["WACATALOG_BUSINESS_ID"] == "already"

    def test_cwd_wins_over_config_dir(self, tmp_path, monkeypatch):
        cfg = tmp_path / "cfg"
        cfg.mkdir()
        (cfg / ".env").write_text("WACATALOG_API_VERSION=v1.0\n", encoding="utf-8")
        (tmp_path / ".env").write_text("WACATALOG_API_VERSION=v2.0\n", encoding="utf-8")
        monkeypatch.delenv("WACATALOG_API_VERSION", raising=False)

        try:
            load_env_files(cfg)
            assert os.environ["WACATALOG_API_VERSION"] == "v2.0"
        finally:
            os.environ.pop("WACATALOG_API_VERSION", None)
