"""Simple .env file loader.

Priority order (highest to lowest):
1. Existing environment variables (never overwritten)
2. .env in current working directory
3. .env in config directory (~/.config/wacatalog/.env)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable


def parse_env_file(path: Path) -> Dict[str, str]:
    """Parse a .env file and return key-value pairs.

    Understands comments, blank lines, ``export KEY=value`` and
    single- or double-quoted values.
    """
    result: Dict[str, str] = {}

    if not path.is_file():
        return result

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return result

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("export "):
            line = line[len("export "):].strip()

        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]

        if key:
            result[key] = value

    return result


def load_env_files(config_dir: Path, extra: Iterable[Path] = ()) -> None:
    """Load .env files into ``os.environ`` without overwriting existing keys.

    Files later in the list win over earlier ones: config dir, then cwd,
    then any ``extra`` paths.
    """
    env_files = [config_dir / ".env", Path.cwd() / ".env", *extra]

    combined: Dict[str, str] = {}
    for env_file in env_files:
        combined.update(parse_env_file(env_file))

    for key, value in combined.items():
        if key not in os.environ:
            os.environ[key] = value
