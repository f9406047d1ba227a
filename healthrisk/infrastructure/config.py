import os
import logging

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


DEFAULT_HISTORY_LIMIT = 50


def _streamlit_secret(name: str) -> str | None:
    if not _HAS_STREAMLIT:
        return None
    try:
        value = st.secrets.get(name)
    except Exception:
        # Raised when the app has no secrets.toml.
        logger.debug("Streamlit secrets unavailable; reading %s from the environment", name)
        return None
    return None if value is None else str(value)


def get_secret(name: str, default: str | None = None) -> str | None:
    """Read a setting from Streamlit secrets, then from the environment."""
    value = _streamlit_secret(name)
    if value is not None:
        return value
    return os.environ.get(name, default)


class Settings:
    @property
    def risk_catalog_path(self) -> str | None:
        """Optional JSON catalog replacing the built-in scoring tables."""
        return get_secret("RISK_CATALOG_PATH") or None

    @property
    def log_level(self) -> str:
        return (get_secret("LOG_LEVEL", "INFO") or "INFO").upper()

    @property
    def history_limit(self) -> int:
        raw = get_secret("RISK_HISTORY_LIMIT")
        if raw is None:
            return DEFAULT_HISTORY_LIMIT
        try:
            value = int(raw)
        except (TypeError, ValueError):
            logger.warning("Invalid RISK_HISTORY_LIMIT %r; using %s", raw, DEFAULT_HISTORY_LIMIT)
            return DEFAULT_HISTORY_LIMIT
        return value if value > 0 else DEFAULT_HISTORY_LIMIT
