from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODING = "cp1252"


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ultrastar-lyrics"
    return Path.home() / ".config" / "ultrastar-lyrics"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Decoding of song files that are not UTF-8
    fallback_encoding: str

    # Remote song files
    http_timeout_s: float
    http_max_retries: int
    http_backoff_base_s: float

    # Export
    json_indent: int


def load_config() -> AppConfig:
    config_dir = _config_dir()
    return AppConfig(
        config_dir=config_dir,
        fallback_encoding=_load_encoding(config_dir),
        http_timeout_s=float(os.getenv("ULTRASTAR_LYRICS_HTTP_TIMEOUT", "10.0")),
        http_max_retries=int(os.getenv("ULTRASTAR_LYRICS_HTTP_MAX_RETRIES", "3")),
        http_backoff_base_s=float(os.getenv("ULTRASTAR_LYRICS_HTTP_BACKOFF_BASE", "1.0")),
        json_indent=int(os.getenv("ULTRASTAR_LYRICS_JSON_INDENT", "2")),
    )


def is_known_encoding(name: str) -> bool:
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


def _load_encoding(config_dir: Path) -> str:
    # Priority: config.json → ULTRASTAR_LYRICS_ENCODING → cp1252
    cfg_path = config_dir / "config.json"
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable %s: %s", cfg_path, e)
        else:
            raw = data.get("fallback_encoding") if isinstance(data, dict) else None
            if raw and is_known_encoding(raw):
                return raw
    env_enc = os.getenv("ULTRASTAR_LYRICS_ENCODING")
    if env_enc and is_known_encoding(env_enc):
        return env_enc
    return DEFAULT_FALLBACK_ENCODING


def save_config_encoding(encoding: str) -> Path:
    if not is_known_encoding(encoding):
        raise ValueError(f"Unknown encoding: {encoding}")
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, str] = {}
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("overwriting unreadable %s", cfg_path)
    if not isinstance(data, dict):
        data = {}
    data["fallback_encoding"] = encoding
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return cfg_path
