from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from sentembed.domain.errors import ConfigError
from sentembed.domain.models import DEFAULT_MODEL

DEFAULT_SETTINGS_PATH = Path("settings.toml")
PROVIDERS = ("huggingface", "dummy")
# loguru built-in levels
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Embeddings:
    provider: str = "huggingface"
    model: str = DEFAULT_MODEL
    device: Optional[str] = None
    cache_folder: Optional[Path] = None


@dataclass(frozen=True)
class Logging:
    level: str = "WARNING"


@dataclass(frozen=True)
class Settings:
    embeddings: Embeddings = Embeddings()
    logging: Logging = Logging()


def _expand(p: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(p))).resolve()


def check_log_level(level: str) -> str:
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {level} (expected one of {', '.join(LOG_LEVELS)})")
    return level


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load settings from a TOML file, then apply SENTEMBED_* environment overrides.

    An explicit path (argument or SENTEMBED_SETTINGS) must exist; the default
    ./settings.toml is optional and falls back to built-in defaults.

    Example settings.toml:

        [embeddings]
        provider = "huggingface"
        model = "sentence-transformers/all-MiniLM-L6-v2"

        [logging]
        level = "INFO"
    """
    load_dotenv()

    explicit = path if path is not None else os.getenv("SENTEMBED_SETTINGS")
    path = Path(explicit) if explicit else DEFAULT_SETTINGS_PATH

    if path.exists():
        raw = _read_toml(path)
    elif explicit:
        raise FileNotFoundError(f"Missing config file: {path}")
    else:
        raw = {}

    defaults = Embeddings()
    try:
        emb_raw = raw.get("embeddings")
        if emb_raw is None:
            embeddings = defaults
        else:
            cache = emb_raw.get("cache_folder")
            embeddings = Embeddings(
                provider=str(emb_raw["provider"]),
                model=str(emb_raw["model"]),
                device=emb_raw.get("device"),
                cache_folder=_expand(cache) if cache else None,
            )

        log_raw = raw.get("logging")
        logging = Logging() if log_raw is None else Logging(level=str(log_raw["level"]).upper())
    except KeyError as e:
        raise ConfigError(f"Missing config key: {e}") from e

    # Env wins over file
    cache_env = os.getenv("SENTEMBED_CACHE_DIR")
    embeddings = Embeddings(
        provider=os.getenv("SENTEMBED_PROVIDER", embeddings.provider),
        model=os.getenv("SENTEMBED_MODEL", embeddings.model),
        device=os.getenv("SENTEMBED_DEVICE", embeddings.device),
        cache_folder=_expand(cache_env) if cache_env else embeddings.cache_folder,
    )
    logging = Logging(level=os.getenv("SENTEMBED_LOG_LEVEL", logging.level).upper())

    if embeddings.provider not in PROVIDERS:
        raise ConfigError(f"Unsupported embedding provider: {embeddings.provider}")
    check_log_level(logging.level)

    return Settings(embeddings=embeddings, logging=logging)
