"""Environment switches for wire tracing.

``SOAPHTTP_LOG_LEVEL`` (level name or number) or a truthy ``SOAPHTTP_DEBUG``
turn on header and body capture for clients created without an explicit
``trace`` option.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

_LEVEL_ENV_VAR = "SOAPHTTP_LOG_LEVEL"
_DEBUG_FLAG = "SOAPHTTP_DEBUG"


def _coerce_level(value: str) -> Optional[int]:
    text = value.strip()
    if text.isdigit():
        return int(text)
    candidate = getattr(logging, text.upper(), None)
    return candidate if isinstance(candidate, int) else None


def _env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _resolve_env_level() -> Optional[int]:
    # An explicit level wins over the debug flag, even when it is not DEBUG.
    value = os.getenv(_LEVEL_ENV_VAR)
    if value and value.strip():
        return _coerce_level(value)
    if _env_truthy(os.getenv(_DEBUG_FLAG)):
        return logging.DEBUG
    return None


def trace_enabled() -> bool:
    """Return True if environment variables ask for DEBUG-level tracing."""
    env_level = _resolve_env_level()
    if env_level is None:
        return False
    return env_level <= logging.DEBUG
