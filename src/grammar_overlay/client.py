from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from .annotations import AnnotationParseError, annotations_from_payload
from .config import ServiceSettings
from .models import CheckResult

logger = logging.getLogger(__name__)


class GrammarServiceError(RuntimeError):
    """Raised when the grammar service cannot be reached or answers badly."""


class AuthenticationError(GrammarServiceError):
    """Raised when the service rejects the supplied credentials."""


class SessionExpiredError(AuthenticationError):
    """Raised when the service rejects the bearer token (HTTP 401)."""


class GrammarServiceClient:
    """Thin wrapper around the login and grammar-check endpoints."""

    def __init__(
        self,
        settings: ServiceSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()

    @property
    def settings(self) -> ServiceSettings:
        return self._settings

    def login(self, username: str, password: str) -> str:
        """Exchange credentials for a bearer token."""
        url = self._url(self._settings.login_path)
        logger.info("Logging in as %s via %s", username, url)
        try:
            response = self._session.post(
                url,
                json={"username": username, "password": password},
                timeout=self._settings.request_timeout,
            )
        except requests.RequestException as exc:
            raise GrammarServiceError(f"Login request failed: {exc}") from exc
        if not response.ok:
            logger.warning("Login rejected with HTTP %s", response.status_code)
            raise AuthenticationError("Invalid username or password")
        body = self._json_body(response)
        token = body.get("token")
        if not body.get("success") or not isinstance(token, str) or not token:
            raise AuthenticationError("Invalid username or password")
        return token

    def check_grammar(self, text: str, token: str) -> CheckResult:
        """Send text for checking and return the flagged words."""
        if not text.strip():
            return CheckResult(text=text, annotations=[])
        url = self._url(self._settings.check_path)
        logger.info("Checking %s characters via %s", len(text), url)
        try:
            response = self._session.post(
                url,
                json={"text": text},
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._settings.request_timeout,
            )
        except requests.RequestException as exc:
            raise GrammarServiceError(f"Grammar check request failed: {exc}") from exc
        if response.status_code == 401:
            raise SessionExpiredError("Session expired; please log in again.")
        if not response.ok:
            raise GrammarServiceError(
                f"Grammar check failed with HTTP {response.status_code}"
            )
        body = self._json_body(response)
        if not body.get("success"):
            raise GrammarServiceError("Grammar service reported an unsuccessful check.")
        try:
            annotations = annotations_from_payload(body.get("errors", []))
        except AnnotationParseError as exc:
            raise GrammarServiceError(str(exc)) from exc
        logger.debug("Service flagged %s words", len(annotations))
        return CheckResult(text=text, annotations=annotations)

    def _url(self, path: str) -> str:
        return self._settings.base_url.rstrip("/") + "/" + path.lstrip("/")

    @staticmethod
    def _json_body(response: requests.Response) -> Mapping[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            raise GrammarServiceError("Grammar service returned invalid JSON.") from exc
        if not isinstance(body, Mapping):
            raise GrammarServiceError("Grammar service returned an unexpected body.")
        return body
