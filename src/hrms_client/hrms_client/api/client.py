from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_HTTP_TIMEOUT


class ApiClient:
    """Thin JSON client for the HRMS REST API.

    One instance is shared by the repositories; ``with_token`` returns a copy
    bound to a single user's bearer token. Transport failures and non-2xx
    answers surface as ``ApiError``.
    """

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None, token: Optional[str] = None):
        self._config = config
        self._session = session or requests.Session()
        self._token = token

    @property
    def token(self) -> Optional[str]:
        return self._token

    def with_token(self, token: Optional[str]) -> "ApiClient":
        return ApiClient(self._config, session=self._session, token=token)

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def request(self, method: str, path: str, *, params: Optional[dict] = None, json: Any = None) -> Any:
        url = self._url(path)
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}
        try:
            resp = self._session.request(
                method,
                url,
                params=params or None,
                json=json,
                headers=self._headers(),
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError("Unable to reach the HRMS server") from e

        if not resp.ok:
            message = _error_message(resp)
            logger.info("%s %s -> %s %s", method, url, resp.status_code, message)
            raise ApiError(message, status_code=resp.status_code, payload=_safe_json(resp))

        if resp.status_code == 204 or not resp.content:
            return None
        body = _safe_json(resp)
        if body is None:
            raise ApiError("Malformed response from the HRMS server", status_code=resp.status_code)
        return body

    def get(self, path: str, **params) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Any = None) -> Any:
        return self.request("POST", path, json=payload)

    def put(self, path: str, payload: Any = None) -> Any:
        return self.request("PUT", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def _safe_json(resp) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


def _error_message(resp) -> str:
    body = _safe_json(resp)
    if isinstance(body, dict):
        msg = body.get("message") or body.get("error")
        if isinstance(msg, dict):
            msg = msg.get("message")
        if msg:
            return str(msg)
    return f"Request failed with status {resp.status_code}"
