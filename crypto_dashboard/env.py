from __future__ import annotations

from pathlib import Path
import os

from dotenv import find_dotenv, load_dotenv


def resolve_env_path(
    dotenv_path: Path | None = None,
    *,
    env_var: str = "CRYPTO_DASHBOARD_ENV_PATH",
) -> Path | None:
    """Explicit path, then $CRYPTO_DASHBOARD_ENV_PATH, then the nearest .env above the cwd."""
    if dotenv_path:
        return Path(dotenv_path)

    env_path = os.getenv(env_var)
    if env_path:
        return Path(env_path).expanduser()

    found = find_dotenv(usecwd=True)
    return Path(found) if found else None


def load_env(dotenv_path: Path | None = None, *, override: bool = False) -> bool:
    """Load environment variables from a .env file. Returns False when none is found."""
    path = resolve_env_path(dotenv_path)
    if not path or not path.exists():
        return False
    return bool(load_dotenv(path, override=override))


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")
