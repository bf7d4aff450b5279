from __future__ import annotations

from typing import Any, Optional

from .client import ApiClient


class ApiRepository:
    """Base for repositories backed by the HRMS REST API.

    Every call is made on behalf of one ``AuthSession``; its token is bound to
    the shared client per call, never stored on the repository.
    """

    def __init__(self, api: ApiClient):
        self._api = api

    def _client(self, auth) -> ApiClient:
        token: Optional[str] = getattr(auth, "token", None) if auth is not None else None
        return self._api.with_token(token)


def unwrap_list(data: Any, *keys: str) -> list:
    """Accept either a bare JSON array or an envelope such as ``{"employees": [...]}``."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in keys:
            value = data.get(key)
            if isinstance(value, list):
                return value
    return []
