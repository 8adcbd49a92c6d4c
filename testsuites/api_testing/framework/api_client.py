"""
================================================================================
Goodbudget API Client with Allure Integration
================================================================================

Thin wrapper around `httpx.Client` for the Goodbudget REST API:
    - base URL, timeout, JSON content type and bearer token from ApiSettings
    - request/response logging through httpx event hooks
    - Allure reporting with redacted headers/bodies and a cURL command
    - non-2xx responses raise `httpx.HTTPStatusError` unchanged

There is no retry: a failing call fails the test.

Usage:
    with ApiClient() as client:
        response = client.post(ENDPOINTS.TRANSACTIONS, json=payload)
        created = ApiResponse.from_response(response, Transaction)

    with ApiClient() as client:
        try:
            client.get(ENDPOINTS.transaction("missing"))
        except httpx.HTTPStatusError as e:
            assert e.response.status_code == 404

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import allure
import httpx
from allure_commons.types import AttachmentType

from autotest_tools.common.config_loader import ApiSettings
from autotest_tools.common.structured_logger import StructuredLogger, create_util_logger
from autotest_tools.report_tools.allure_utils import truncate


MASK = "***MASKED***"
SENSITIVE_HEADERS = {"authorization", "x-api-key", "cookie", "set-cookie"}
SENSITIVE_BODY_TOKENS = ("password", "secret", "token", "api_key", "authorization", "session")


class Endpoints:
    """REST resource paths, relative to the API base URL."""

    TRANSACTIONS = "/transactions"
    ENVELOPES = "/envelopes"
    ACCOUNTS = "/accounts"

    @classmethod
    def transaction(cls, transaction_id: str) -> str:
        return f"{cls.TRANSACTIONS}/{transaction_id}"


ENDPOINTS = Endpoints


class ApiClientError(Exception):
    """Raised when the client is used incorrectly (e.g. outside its context)."""


class ApiClient:
    """
    HTTP client for the Goodbudget API.

    Must be used as a context manager so the underlying connection pool is
    always closed.
    """

    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        logger: Optional[StructuredLogger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            settings: API settings. Loaded from configuration if None.
            logger: Logger for request/response records.
            transport: Custom httpx transport (e.g. httpx.MockTransport in unit tests).
        """
        self.settings = settings or ApiSettings.from_config()
        self.logger = logger or create_util_logger("ApiClient")
        self.transport = transport
        self.session: Optional[httpx.Client] = None

    def __enter__(self) -> "ApiClient":
        self.session = httpx.Client(
            base_url=self.settings.base_url,
            timeout=httpx.Timeout(self.settings.timeout_ms / 1000),
            headers=self.default_headers(),
            event_hooks={
                "request": [self._log_request],
                "response": [self._log_response],
            },
            transport=self.transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.session:
            self.session.close()
            self.session = None

    def default_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.auth_token:
            headers["Authorization"] = f"Bearer {self.settings.auth_token}"
        return headers

    # =========================================================================
    # Requests
    # =========================================================================

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Execute a request.

        Args:
            method: HTTP method
            url: Path relative to the API base URL
            **kwargs: Passed to httpx (json, params, headers, ...)

        Returns:
            The 2xx httpx.Response

        Raises:
            httpx.HTTPStatusError: the server answered with a non-2xx status
            ApiClientError: the client is not open
        """
        if self.session is None:
            raise ApiClientError(
                "ApiClient must be used within a context manager. "
                "Use 'with ApiClient() as client:'"
            )
        response = self.session.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return self.request("GET", url, params=params)

    def post(self, url: str, json: Any = None) -> httpx.Response:
        return self.request("POST", url, json=json)

    def put(self, url: str, json: Any = None) -> httpx.Response:
        return self.request("PUT", url, json=json)

    def delete(self, url: str) -> httpx.Response:
        return self.request("DELETE", url)

    # =========================================================================
    # Event Hooks
    # =========================================================================

    def _log_request(self, request: httpx.Request) -> None:
        body = self._redact_body(self._request_body(request))
        self.logger.info(
            f"➡️ {request.method} {request.url}",
            {"body": body, "params": dict(request.url.params) or None},
        )

    def _log_response(self, response: httpx.Response) -> None:
        response.read()
        request = response.request
        if response.is_success:
            self.logger.info(
                f"⬅️ {response.status_code} {request.method} {request.url}",
                {"body": self._response_body(response)},
            )
        else:
            self.logger.error(
                f"⬅️ {response.status_code} {request.method} {request.url}",
                {"error": self._response_body(response)},
            )
        self._log_to_allure(request, response)

    # =========================================================================
    # Reporting
    # =========================================================================

    def _log_to_allure(self, request: httpx.Request, response: httpx.Response) -> None:
        """
        Attach the exchange to the Allure report.

        Attaches:
            - Request URL
            - Request headers and body (redacted)
            - cURL command for reproduction
            - Response status and body (truncated)
        """
        status_emoji = "✅" if response.is_success else "❌"
        step_title = f"{status_emoji} {request.method} {request.url.path} → {response.status_code}"

        with allure.step(step_title):
            allure.attach(
                str(request.url),
                name="🔗 Request URL",
                attachment_type=AttachmentType.TEXT
            )

            safe_headers = self._redact_headers(dict(request.headers))
            allure.attach(
                json.dumps(safe_headers, ensure_ascii=False, indent=2),
                name="📤 Request Headers",
                attachment_type=AttachmentType.JSON
            )

            safe_body = self._redact_body(self._request_body(request))
            if safe_body is not None:
                allure.attach(
                    json.dumps(safe_body, ensure_ascii=False, indent=2),
                    name="📤 Request Body",
                    attachment_type=AttachmentType.JSON
                )

            allure.attach(
                self._build_curl(request.method, str(request.url), safe_headers, safe_body),
                name="🔧 cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_emoji} {response.status_code}",
                name="📥 Response Status",
                attachment_type=AttachmentType.TEXT
            )

            body = self._response_body(response)
            content = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False, indent=2)
            allure.attach(
                truncate(content),
                name="📥 Response Body",
                attachment_type=AttachmentType.JSON
            )

    @staticmethod
    def _request_body(request: httpx.Request) -> Any:
        if not request.content:
            return None
        try:
            return json.loads(request.content)
        except ValueError:
            return request.content.decode("utf-8", errors="replace")

    @staticmethod
    def _response_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or "<empty>"

    def _redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        """Mask sensitive header values before logging."""
        return {
            key: MASK if key.lower() in SENSITIVE_HEADERS else value
            for key, value in headers.items()
        }

    def _redact_body(self, payload: Any) -> Any:
        """Recursively mask sensitive fields in request bodies."""
        if isinstance(payload, dict):
            redacted = {}
            for key, value in payload.items():
                if any(token in key.lower() for token in SENSITIVE_BODY_TOKENS):
                    redacted[key] = MASK
                else:
                    redacted[key] = self._redact_body(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_body(item) for item in payload]
        return payload

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
    ) -> str:
        """Build a copy-paste ready cURL command from already redacted parts."""
        parts = [f"curl -X {method}"]
        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")
        if body is not None:
            parts.append(f"-d '{json.dumps(body, ensure_ascii=False)}'")
        parts.append(f"'{url}'")
        return " \\\n  ".join(parts)


__all__ = [
    "ApiClient",
    "ApiClientError",
    "ENDPOINTS",
    "Endpoints",
]
