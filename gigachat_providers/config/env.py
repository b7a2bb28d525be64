"""gigachat_providers.config.env
===============================

Environment variable naming and helpers for provider settings.

Each setting ``<field>`` of provider ``<p>`` is read from ``<P>_<FIELD>``
(e.g. ``GIGACHAT_CLIENT_SECRET``). ``ENV_ALIASES`` lists additional accepted
names, canonical first. Helpers never raise on unknown providers or unset
variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Setting name -> env suffix
ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "base_url": "BASE_URL",
    "auth_url": "AUTH_URL",
    "scope": "SCOPE",
    "client_id": "CLIENT_ID",
    "client_secret": "CLIENT_SECRET",  # pragma: allowlist secret - env suffix name, not a secret
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "system_message": "SYSTEM_MESSAGE",
    "verify_ssl": "VERIFY_SSL",
}

# (provider, field) -> ordered tuple of accepted env var names (canonical first)
ENV_ALIASES: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("gigachat", "client_id"): ("GIGACHAT_CLIENT_ID", "GIGACHAT_API_KEY"),
    ("gigachat", "verify_ssl"): ("GIGACHAT_VERIFY_SSL", "GIGACHAT_VERIFY_SSL_CERTS"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme' or 'example', or starts
    with 'test_'. Case-insensitive, surrounding spaces ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(provider: str, field: str) -> Iterable[str]:
    """Yield accepted env var names for ``provider``/``field`` in priority order."""
    p = (provider or "").lower()
    suffix = ENV_FIELD_MAP.get(field)
    canonical = f"{p.upper()}_{suffix}" if suffix else None
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get((p, field), ()):
        if alias != canonical:
            yield alias


def resolve_env_value(provider: str, field: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_name)`` for the first non-empty candidate.

    Returns ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider, field):
        val = os.getenv(name)
        if val:
            return val, name
    return None, None


def parse_bool(val: object, default: bool = True) -> bool:
    """Interpret common truthy/falsey spellings; ``default`` for anything else."""
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    s = str(val).strip().lower()
    if s in {"1", "t", "true", "y", "yes", "on"}:
        return True
    if s in {"0", "f", "false", "n", "no", "off"}:
        return False
    return default


__all__ = [
    "ENV_FIELD_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_env_value",
    "parse_bool",
]
