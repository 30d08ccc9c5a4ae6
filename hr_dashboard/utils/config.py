"""Load and validate environment variables. Uses python-dotenv.

Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import os

DEFAULT_API_URL = "https://drop-pick-production.up.railway.app"


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Existing environment variables win over .env values.
    """
    load_dotenv(_project_root() / ".env", override=False)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    raw = get_optional(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: Optional[float] = None) -> Optional[float]:
    """Get optional env var as a positive float; return default if missing or invalid."""
    raw = get_optional(key)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


# --- Public config accessors ---

def api_base_url() -> str:
    """Backend origin that server-relative API paths are appended to."""
    return get_optional("HR_API_URL", DEFAULT_API_URL).rstrip("/")


def api_timeout() -> Optional[float]:
    """Optional: request timeout in seconds. None leaves the HTTP library default."""
    return get_optional_float("HR_API_TIMEOUT")


def session_dir() -> Path:
    """Directory for the persisted session keys. Default data/session/."""
    val = get_optional("HR_SESSION_DIR")
    if val:
        return Path(val).expanduser()
    return _project_root() / "data" / "session"


def log_level() -> str:
    """Optional: logging level name. Default INFO."""
    return get_optional("LOG_LEVEL", "INFO").upper()


def log_file() -> Path | None:
    """Optional: write logs to this file as well as stderr."""
    val = get_optional("LOG_FILE")
    return Path(val).expanduser() if val else None


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
