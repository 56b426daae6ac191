"""Runtime configuration for the visualizer web app.

Defaults live on the dataclass; every field can be overridden through a
STEPPER_* environment variable:

    STEPPER_HOST=0.0.0.0
    STEPPER_PORT=8080
    STEPPER_DEBUG=1
    STEPPER_LOG_LEVEL=DEBUG
    STEPPER_SPEED=slow
    STEPPER_MAX_RUNS=64
    STEPPER_SECRET_KEY=...
"""

import os
import secrets
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Mapping, Optional

from engine.stepper import SPEED_PRESETS

ENV_PREFIX = "STEPPER_"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class AppConfig:
    """Configuration for the Flask app and its playback defaults."""

    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False

    # Name of a logging level, e.g. "INFO" or "DEBUG"
    log_level: str = "INFO"

    # Key into engine.stepper.SPEED_PRESETS
    default_speed: str = "medium"

    # Recorded runs kept in memory by the web app, oldest evicted first
    max_runs: int = 256

    secret_key: str = field(default_factory=lambda: secrets.token_hex(32))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build a config from defaults overridden by STEPPER_* variables."""
        env = os.environ if environ is None else environ
        cfg = cls()

        def get(name: str) -> Optional[str]:
            return env.get(ENV_PREFIX + name)

        if get("HOST"):
            cfg.host = get("HOST")
        if get("PORT"):
            cfg.port = _int_var(get, "PORT")
        if get("DEBUG") is not None:
            cfg.debug = get("DEBUG").strip().lower() in _TRUTHY
        if get("LOG_LEVEL"):
            cfg.log_level = get("LOG_LEVEL").upper()
        if get("SPEED"):
            speed = get("SPEED").lower()
            if speed not in SPEED_PRESETS:
                raise ValueError(
                    f"{ENV_PREFIX}SPEED must be one of {sorted(SPEED_PRESETS)}, got {get('SPEED')!r}"
                )
            cfg.default_speed = speed
        if get("MAX_RUNS"):
            cfg.max_runs = _int_var(get, "MAX_RUNS")
            if cfg.max_runs < 1:
                raise ValueError(f"{ENV_PREFIX}MAX_RUNS must be at least 1, got {cfg.max_runs}")
        if get("SECRET_KEY"):
            cfg.secret_key = get("SECRET_KEY")
        return cfg


def _int_var(get: Callable[[str], Optional[str]], name: str) -> int:
    try:
        return int(get(name))
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {get(name)!r}") from None


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load the configuration once and cache it."""
    return AppConfig.from_env()


def reset_config() -> None:
    """Drop the cached configuration (for tests)."""
    get_config.cache_clear()
