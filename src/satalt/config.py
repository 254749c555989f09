"""Process-wide settings, read once at startup and passed in explicitly."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_BACKEND_URL = "http://127.0.0.1:8000"


@dataclass(frozen=True)
class Settings:
    backend_url: str  # Altitude backend root, no trailing slash
    tz_name: str | None  # IANA zone for form input; None = process zone
    request_timeout: float  # Seconds
    log_level: str


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment (call load_dotenv() first for .env).

    Raises:
        ValueError: SATALT_TIMEOUT is not a positive number.
    """
    env = os.environ if environ is None else environ

    backend_url = (env.get("BACKEND_URL") or DEFAULT_BACKEND_URL).strip().rstrip("/")

    raw_timeout = env.get("SATALT_TIMEOUT") or "30"
    try:
        timeout = float(raw_timeout)
    except ValueError as e:
        raise ValueError(f"SATALT_TIMEOUT must be a number, got {raw_timeout!r}") from e
    if timeout <= 0:
        raise ValueError(f"SATALT_TIMEOUT must be positive, got {raw_timeout!r}")

    return Settings(
        backend_url=backend_url,
        tz_name=(env.get("SATALT_TZ") or "").strip() or None,
        request_timeout=timeout,
        log_level=(env.get("SATALT_LOG_LEVEL") or "INFO").strip().upper(),
    )
