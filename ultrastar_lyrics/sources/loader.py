from __future__ import annotations

import logging
from pathlib import Path
import time

import requests

from ultrastar_lyrics.config import AppConfig

from .errors import LoadError, SourceNotFound, SourceUnavailable

logger = logging.getLogger(__name__)


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def decode_bytes(data: bytes, fallback_encoding: str) -> str:
    # utf-8-sig also strips the BOM some editors write
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("not UTF-8, decoding as %s", fallback_encoding)
    try:
        return data.decode(fallback_encoding)
    except UnicodeDecodeError as e:
        raise LoadError(f"Cannot decode song file as UTF-8 or {fallback_encoding}") from e


def _fetch_url(url: str, cfg: AppConfig) -> bytes:
    for attempt in range(1, cfg.http_max_retries + 1):
        try:
            r = requests.get(url, timeout=cfg.http_timeout_s)
            if r.status_code == 404:
                raise SourceNotFound(f"Not found: {url}")
            r.raise_for_status()
            return r.content
        except requests.RequestException as e:
            logger.warning("fetch error (attempt %s/%s): %s", attempt, cfg.http_max_retries, e)
            if attempt == cfg.http_max_retries:
                raise SourceUnavailable(f"Cannot fetch {url}: {e}") from e
            time.sleep(cfg.http_backoff_base_s * attempt)

    raise SourceUnavailable(f"Cannot fetch {url}: no attempts made")


def _read_path(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise SourceNotFound(f"No such file: {path}") from e
    except OSError as e:
        raise SourceUnavailable(f"Cannot read {path}: {e}") from e


def load_text(location: str | Path, *, cfg: AppConfig) -> str:
    """Read an UltraStar song file from a local path or an http(s) URL."""
    if isinstance(location, str) and is_url(location):
        data = _fetch_url(location, cfg)
    else:
        data = _read_path(Path(location))
    return decode_bytes(data, cfg.fallback_encoding)
