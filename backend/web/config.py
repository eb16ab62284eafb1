"""
Configuration and startup security checks for the innovation portal.

Why: The portal ships demo accounts with well-known plaintext secrets. This
module reads all environment knobs in one place and provides a guard that
refuses obviously unsafe production deployments without burdening local
development.

Permissions: The caller needs no special privileges. The functions only read
environment variables; the guard raises `SystemExit` on fatal misconfiguration.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

DEFAULT_SESSION_CACHE = ".portal/session.json"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _is_prod_like(env: str) -> bool:
    env_l = (env or "").lower()
    return env_l in {"prod", "production", "stage", "staging"}


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got: {raw!r}")


@dataclass(frozen=True)
class PortalConfig:
    environment: str
    session_cache_path: str
    seed_demo_data: bool
    log_level: str

    @property
    def is_prod_like(self) -> bool:
        return _is_prod_like(self.environment)


def load_portal_config() -> PortalConfig:
    """Parse and validate portal configuration from environment variables.

    Behavior:
        - `PORTAL_ENV` defaults to "dev".
        - `PORTAL_SESSION_CACHE` defaults to `.portal/session.json`.
        - `PORTAL_SEED_DEMO` defaults to true outside prod-like environments.
        - `PORTAL_LOG_LEVEL` must be a standard logging level name.
    """
    env = (os.getenv("PORTAL_ENV") or "dev").strip().lower()
    cache_path = (os.getenv("PORTAL_SESSION_CACHE") or "").strip() or DEFAULT_SESSION_CACHE
    seed = _bool_env("PORTAL_SEED_DEMO", not _is_prod_like(env))
    level = (os.getenv("PORTAL_LOG_LEVEL") or "INFO").strip().upper() or "INFO"
    if level not in _LOG_LEVELS:
        raise ValueError(f"PORTAL_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got: {level!r}")
    return PortalConfig(environment=env, session_cache_path=cache_path, seed_demo_data=seed, log_level=level)


def ensure_secure_config_on_startup() -> None:
    """Fail fast on unsafe production configuration.

    Checks (prod/stage only):
    - Demo seeding must be disabled; demo accounts use the secret "password".
    - PORTAL_SESSION_CACHE must be set explicitly so the cached identity does
      not land in whatever working directory the process was started from.
    """
    env = os.getenv("PORTAL_ENV", "dev")
    if not _is_prod_like(env):
        return  # dev/test remain permissive

    try:
        seed = _bool_env("PORTAL_SEED_DEMO", False)
    except ValueError as exc:
        raise SystemExit(f"Refusing to start: {exc}")
    if seed:
        raise SystemExit(
            "Refusing to start: PORTAL_SEED_DEMO must be false in production/staging (demo secrets are public)."
        )

    if not (os.getenv("PORTAL_SESSION_CACHE") or "").strip():
        raise SystemExit(
            "Refusing to start: PORTAL_SESSION_CACHE must be set explicitly in production/staging."
        )
