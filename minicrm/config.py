"""
Runtime configuration.

Order of precedence (lowest first):
  1. model defaults
  2. YAML file (config/default.yml next to the package, or $MINICRM_CONFIG)
  3. environment (MINICRM_*), after .env is loaded without overriding

A missing or invalid YAML file is not fatal: defaults are used and a warning
is logged.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "y", "on"}

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "default.yml"


class StorageConfig(BaseModel):
    backend: Literal["json", "memory"] = "json"
    path: str = Field("data/contacts.json", min_length=1)
    fsync: bool = True


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    format: Literal["text", "json"] = "text"


class AppConfig(BaseModel):
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _read_raw_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("config file not found, using defaults: %s", path)
        return {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("error reading config file %s, using defaults: %s", path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("config root is not a mapping, using defaults: %s", path)
        return {}
    return data


def _env_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    storage = raw.get("storage") or {}
    logging_section = raw.get("logging") or {}
    storage = dict(storage) if isinstance(storage, dict) else {}
    logging_section = dict(logging_section) if isinstance(logging_section, dict) else {}

    if os.getenv("MINICRM_STORE_BACKEND"):
        storage["backend"] = os.environ["MINICRM_STORE_BACKEND"].strip().lower()
    if os.getenv("MINICRM_DATA_PATH"):
        storage["path"] = os.environ["MINICRM_DATA_PATH"]
    if os.getenv("MINICRM_FSYNC"):
        storage["fsync"] = os.environ["MINICRM_FSYNC"].strip().lower() in _TRUE
    if os.getenv("MINICRM_LOG_LEVEL"):
        logging_section["level"] = os.environ["MINICRM_LOG_LEVEL"]
    if os.getenv("MINICRM_LOG_FORMAT"):
        logging_section["format"] = os.environ["MINICRM_LOG_FORMAT"].strip().lower()

    return {"storage": storage, "logging": logging_section}


def resolve_config_path(path: Union[str, Path, None] = None) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.getenv("MINICRM_CONFIG")
    return Path(env_path) if env_path else _DEFAULT_CONFIG_PATH


def load_config(path: Union[str, Path, None] = None, *, dotenv: bool = True) -> AppConfig:
    """Read YAML + environment and validate. Reads the disk on every call."""
    if dotenv:
        load_dotenv(override=False)

    config_path = resolve_config_path(path)
    raw = _env_overrides(_read_raw_yaml(config_path))

    try:
        app_config = AppConfig(
            storage=StorageConfig(**raw["storage"]),
            logging=LoggingConfig(**raw["logging"]),
        )
    except ValidationError as exc:
        logger.warning("invalid config in %s, using defaults: %s", config_path, exc)
        app_config = AppConfig()

    return app_config
