"""Attempt ceilings that bound generator latency."""

from __future__ import annotations

import logging
import os


logger = logging.getLogger(__name__)

_MAX_ATTEMPTS_ENV = "DUGOUT_MAX_ATTEMPTS"
_MULTI_ATTEMPT_FACTOR_ENV = "DUGOUT_MULTI_ATTEMPT_FACTOR"

MAX_ATTEMPTS_DEFAULT = 200
MULTI_ATTEMPT_FACTOR_DEFAULT = 300


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def max_attempts() -> int:
    """Randomized constructions tried per single lineup."""

    return _env_int(_MAX_ATTEMPTS_ENV, MAX_ATTEMPTS_DEFAULT, min_value=1)


def multi_attempt_factor() -> int:
    """Per-requested-lineup share of the combined multi-lineup budget."""

    return _env_int(_MULTI_ATTEMPT_FACTOR_ENV, MULTI_ATTEMPT_FACTOR_DEFAULT, min_value=1)
