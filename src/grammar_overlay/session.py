from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import ServiceSettings

LOGGER = logging.getLogger(__name__)


class TokenStore:
    """Persists the bearer token between CLI invocations."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        """Return the stored token, or None when nobody is logged in."""
        if not self._path.exists():
            return None
        token = self._path.read_text(encoding="utf-8").strip()
        return token or None

    def save(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.unlink(missing_ok=True)
        # Owner-only from creation; the token must never be group or world readable.
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(token)
        tmp_path.replace(self._path)
        LOGGER.info("Stored session token at %s", self._path)

    def clear(self) -> bool:
        """Remove the stored token; return True if one existed."""
        if not self._path.exists():
            return False
        self._path.unlink()
        LOGGER.info("Cleared session token at %s", self._path)
        return True


def store_from_settings(settings: ServiceSettings) -> TokenStore:
    return TokenStore(settings.token_path)


def resolve_token(settings: ServiceSettings, store: TokenStore) -> str | None:
    """Prefer a token from the configured environment variable, then the store."""
    if settings.token_env and os.environ.get(settings.token_env):
        return os.environ[settings.token_env]
    return store.load()
