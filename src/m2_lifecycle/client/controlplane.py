"""Control-plane HTTP client."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from m2_lifecycle.client.auth import resolve_auth
from m2_lifecycle.client.errors import (
    AuthenticationError,
    ConflictError,
    ControlPlaneAPIError,
    ControlPlaneConnectionError,
    NotFoundError,
    ThrottlingError,
    ValidationError,
)
from m2_lifecycle.config.constants import DEFAULT_MAX_RETRIES
from m2_lifecycle.config.models import ControlPlaneProfile

logger = structlog.get_logger()


class ControlPlaneClient:
    """Synchronous HTTP client for the control-plane REST API."""

    def __init__(
        self,
        profile: ControlPlaneProfile,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.profile = profile
        self.base_url = profile.url
        if not profile.verify_ssl:
            logger.warning("tls_verification_disabled", url=profile.url)
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=resolve_auth(profile),
            verify=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport or httpx.HTTPTransport(retries=DEFAULT_MAX_RETRIES),
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ControlPlaneClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response
        status = response.status_code
        try:
            detail = response.json().get("message", response.text)
        except (json.JSONDecodeError, AttributeError):
            detail = response.text
        logger.debug(
            "control_plane_error_response",
            method=response.request.method,
            path=response.request.url.path,
            status=status,
            detail=detail,
        )
        if status in (401, 403):
            raise AuthenticationError(f"Authentication failed: {detail}")
        if status == 404:
            raise NotFoundError(f"Not found: {detail}")
        if status == 409:
            raise ConflictError(f"Conflict: {detail}")
        if status in (400, 422):
            raise ValidationError(detail)
        if status == 429:
            raise ThrottlingError(f"Throttled: {detail}")
        raise ControlPlaneAPIError(status, detail)

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            raise ControlPlaneConnectionError(
                f"Cannot connect to control plane at {self.profile.url}: {exc}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise ControlPlaneConnectionError(
                f"Request to {self.profile.url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise ControlPlaneConnectionError(
                f"Invalid URL for control plane at {self.profile.url}: {exc}"
            ) from exc
        return self._handle_response(response)

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    def get_json(self, path: str, **kwargs: Any) -> Any:
        return _decode(self.get(path, **kwargs))

    def post_json(self, path: str, **kwargs: Any) -> Any:
        return _decode(self.post(path, **kwargs))

    def patch_json(self, path: str, **kwargs: Any) -> Any:
        return _decode(self.patch(path, **kwargs))


def _decode(resp: httpx.Response) -> Any:
    if not resp.content:
        return {}
    try:
        return resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        # Fallback: decode with replacement for non-UTF8 responses
        return json.loads(resp.content.decode("utf-8", errors="replace"))
