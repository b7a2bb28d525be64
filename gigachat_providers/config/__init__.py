"""Unified configuration layer.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) named by PROVIDERS_CONFIG_FILE
    3. Environment variables (``GIGACHAT_MODEL``, ``GIGACHAT_CLIENT_ID``, ...)
    4. In-code overrides passed to :func:`get_provider_config`

A ``.env`` file (path from ``DOTENV_FILE``, default ``.env``) is loaded once
before environment variables are read. Its values only replace variables
that are unset or hold placeholders.

External config file example::

    gigachat:
      model: GigaChat-Pro
      scope: GIGACHAT_API_CORP
      verify_ssl: false

Derived settings:
    * ``client_id`` falls back to ``api_key`` when not set explicitly.
    * ``verify_ssl`` is always a bool (or a CA bundle path if one is given).

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    GIGACHAT_DEFAULT_AUTH_URL,
    GIGACHAT_DEFAULT_BASE_URL,
    GIGACHAT_DEFAULT_MODEL,
    GIGACHAT_DEFAULT_SCOPE,
)
from .env import ENV_FIELD_MAP, is_placeholder, parse_bool, resolve_env_value


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "gigachat": {
        "model": GIGACHAT_DEFAULT_MODEL,
        "base_url": GIGACHAT_DEFAULT_BASE_URL,
        "auth_url": GIGACHAT_DEFAULT_AUTH_URL,
        "scope": GIGACHAT_DEFAULT_SCOPE,
        "verify_ssl": True,
    },
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse KEY=VALUE lines from the dotenv file into ``os.environ`` once."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            if k.startswith("export "):
                k = k[len("export "):].strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _load_external_config() -> Dict[str, Any]:
    """Load (and cache) the file named by PROVIDERS_CONFIG_FILE; JSON first, then YAML."""
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file and dotenv state (tests, reload)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in ENV_FIELD_MAP:
        val, _ = resolve_env_value(provider, field)
        if val is not None and not is_placeholder(val):
            out[field] = val
    return out


def _normalize_verify(value: Any) -> Any:
    """Bool-like strings become bools; anything else is a CA bundle path."""
    if isinstance(value, bool) or value is None:
        return True if value is None else value
    text = str(value).strip()
    if text.lower() in {"1", "t", "true", "y", "yes", "on", "0", "f", "false", "n", "no", "off"}:
        return parse_bool(text)
    return text


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if not cfg.get("client_id") and cfg.get("api_key"):
        cfg["client_id"] = cfg["api_key"]
    if "verify_ssl" in cfg:
        cfg["verify_ssl"] = _normalize_verify(cfg["verify_ssl"])
    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
