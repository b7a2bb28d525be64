"""gigachat_providers.config.defaults
===================================

Central place for stable default values. They can be overridden via
environment variables, an external configuration file or constructor
arguments, but give working fallbacks for local development and tests.

This module performs no I/O and imports nothing from the rest of the package.
"""

from __future__ import annotations

# ---- GigaChat endpoints ----
GIGACHAT_DEFAULT_MODEL = "GigaChat"
GIGACHAT_DEFAULT_BASE_URL = "https://gigachat.devices.sberbank.ru/api/v1"
GIGACHAT_DEFAULT_AUTH_URL = "https://ngw.devices.sberbank.ru:9443/api/v2/oauth"
# Scope for personal accounts; business accounts use GIGACHAT_API_B2B / GIGACHAT_API_CORP.
GIGACHAT_DEFAULT_SCOPE = "GIGACHAT_API_PERS"
GIGACHAT_DEFAULT_SYSTEM_MESSAGE = None

# Purpose sent with multipart uploads.
GIGACHAT_FILE_PURPOSE = "general"

# ---- CLI ----
PROVIDER_CLI_DEFAULT_PROVIDER = "gigachat"
