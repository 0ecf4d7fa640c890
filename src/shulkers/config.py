from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional

from .sources.modrinth import MODRINTH_URL
from .sources.spigot import SPIGET_URL

APP = "shulkers"

logger = logging.getLogger(__name__)


def config_dir() -> Path:
    """Where shulkers keeps config.json and an optional .env.

    ``%APPDATA%/shulkers`` on Windows, otherwise under ``$XDG_CONFIG_HOME``
    (falling back to ``~/.config``).
    """
    if os.name == "nt":
        return Path(os.environ.get("APPDATA") or Path.home()) / APP
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return (Path(xdg) if xdg else Path.home() / ".config") / APP


def config_path() -> Path:
    return config_dir() / "config.json"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def read_env_file(path: Path) -> Dict[str, str]:
    """Read ``SHULKERS_*``-style settings from a dotenv file.

    Blank lines and ``#`` comments are skipped, a leading ``export`` is
    ignored and one level of matching quotes is removed. A missing or
    unreadable file reads as empty.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return {}

    values: Dict[str, str] = {}
    for line in map(str.strip, text.splitlines()):
        if line.startswith("#"):
            continue
        key, sep, value = line.removeprefix("export ").partition("=")
        key = key.strip()
        if sep and key:
            values[key] = _unquote(value.strip())
    return values


def load_env_files(directory: Path) -> None:
    """Load .env from the config dir, then the CWD; real env vars always win."""
    combined: Dict[str, str] = {}
    for env_file in (directory / ".env", Path.cwd() / ".env"):
        if env_file.exists():
            combined.update(read_env_file(env_file))
    for key, value in combined.items():
        os.environ.setdefault(key, value)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default


@dataclass
class Settings:
    spigot_url: str = SPIGET_URL
    modrinth_url: str = MODRINTH_URL
    timeout_s: float = 15.0
    cache_ttl_s: float = 300.0     # catalog responses stay fresh for 5 minutes
    search_limit: int = 10         # default --limit for `search`
    info_limit: int = 5            # per-catalog results considered by `info`
    fuzzy_threshold: float = 0.2
    log_level: str = "WARNING"

    @staticmethod
    def load(path: Optional[Path] = None) -> "Settings":
        path = path or config_path()

        # Priority: config dir .env < current dir .env < existing env vars
        load_env_files(config_dir())

        data: dict = {}
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                logger.warning("Ignoring unreadable config file %s", path)
                data = {}

        try:
            s = Settings(
                spigot_url=str(data.get("spigot_url", Settings.spigot_url)),
                modrinth_url=str(data.get("modrinth_url", Settings.modrinth_url)),
                timeout_s=float(data.get("timeout_s", Settings.timeout_s)),
                cache_ttl_s=float(data.get("cache_ttl_s", Settings.cache_ttl_s)),
                search_limit=int(data.get("search_limit", Settings.search_limit)),
                info_limit=int(data.get("info_limit", Settings.info_limit)),
                fuzzy_threshold=float(data.get("fuzzy_threshold", Settings.fuzzy_threshold)),
                log_level=str(data.get("log_level", Settings.log_level)),
            )
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid values in config file %s", path)
            s = Settings()

        # Environment overrides (highest priority)
        s.spigot_url = os.environ.get("SHULKERS_SPIGOT_URL", s.spigot_url)
        s.modrinth_url = os.environ.get("SHULKERS_MODRINTH_URL", s.modrinth_url)
        s.timeout_s = _env_float("SHULKERS_TIMEOUT", s.timeout_s)
        s.cache_ttl_s = _env_float("SHULKERS_CACHE_TTL", s.cache_ttl_s)
        s.log_level = os.environ.get("SHULKERS_LOG_LEVEL", s.log_level).upper()

        return s

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
        return path
