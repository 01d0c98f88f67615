from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .catalog.client import Account
from .env import load_env_files
from .urls import DEFAULT_BASE_URL, normalize_api_version, root_url

APP = "wacatalog"

DEFAULT_API_VERSION = "v21.0"


def config_dir() -> Path:
    """
    Cross-platform config directory:
      - Windows: %APPDATA%\\wacatalog
      - macOS/Linux: $XDG_CONFIG_HOME/wacatalog or ~/.config/wacatalog
    """
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))) / APP


def config_path() -> Path:
    return config_dir() / "config.json"


@dataclass
class Settings:
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    business_id: str = ""
    access_token: str = ""   # system user or page access token
    timeout_s: int = 30

    @staticmethod
    def load(path: Optional[Path] = None) -> "Settings":
        path = path or config_path()

        # .env files first; real environment variables still win
        load_env_files(config_dir())

        data: dict = {}
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                data = {}
            if not isinstance(data, dict):
                data = {}

        s = Settings(
            base_url=str(data.get("base_url", Settings.base_url)),
            api_version=str(data.get("api_version", Settings.api_version)),
            business_id=str(data.get("business_id", Settings.business_id)),
            access_token=str(data.get("access_token", Settings.access_token)),
            timeout_s=_as_int(data.get("timeout_s"), Settings.timeout_s),
        )

        # Environment overrides (highest priority)
        s.base_url = os.environ.get("WACATALOG_BASE_URL", s.base_url)
        s.api_version = os.environ.get("WACATALOG_API_VERSION", s.api_version)
        s.business_id = os.environ.get("WACATALOG_BUSINESS_ID", s.business_id)
        s.access_token = os.environ.get(
            "WACATALOG_ACCESS_TOKEN", os.environ.get("WHATSAPP_ACCESS_TOKEN", s.access_token)
        )
        s.timeout_s = _as_int(os.environ.get("WACATALOG_TIMEOUT"), s.timeout_s)

        s.normalize()
        return s

    def normalize(self) -> None:
        self.base_url = root_url(self.base_url)
        self.api_version = normalize_api_version(self.api_version) or DEFAULT_API_VERSION

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or config_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "base_url": self.base_url,
            "api_version": self.api_version,
            "business_id": self.business_id,
            "access_token": self.access_token,
            "timeout_s": self.timeout_s,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    def is_configured(self) -> bool:
        """Check if a business id and access token are set."""
        return bool(self.business_id and self.access_token)

    def account(self) -> Account:
        return Account(
            api_version=self.api_version,
            business_id=self.business_id,
            access_token=self.access_token,
        )


def _as_int(value: object, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
