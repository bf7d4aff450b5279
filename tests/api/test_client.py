from __future__ import annotations

import json

import pytest
import requests

from src.hrms_client.hrms_client.api.base import unwrap_list
from src.hrms_client.hrms_client.api.client import ApiClient, ApiConfig
from src.hrms_client.hrms_client.core.exceptions import ApiError


class FakeResponse:
    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        if raw is not None:
            self.content = raw
        else:
            self.content = b"" if body is None else json.dumps(body).encode()

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.content)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def client(session, token=None):
    return ApiClient(ApiConfig(base_url="http://hrms.test/api/", timeout=3), session=session, token=token)


def test_get_builds_url_drops_empty_params_and_sends_bearer():
    session = FakeSession(FakeResponse(body=[{"a": 1}]))

    data = client(session).with_token("abc").get("/attendance", month="2025-01", employee_id=None, startDate="")

    method, url, kwargs = session.calls[0]
    assert data == [{"a": 1}]
    assert (method, url) == ("GET", "http://hrms.test/api/attendance")
    assert kwargs["params"] == {"month": "2025-01"}
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["timeout"] == 3


def test_with_token_does_not_change_original():
    base = client(FakeSession())
    bound = base.with_token("t1")
    assert base.token is None
    assert bound.token == "t1"


def test_error_status_surfaces_server_message():
    session = FakeSession(FakeResponse(400, {"message": "Already checked in today"}))

    with pytest.raises(ApiError) as exc:
        client(session).post("/attendance/checkin")

    assert exc.value.status_code == 400
    assert exc.value.message == "Already checked in today"


def test_unauthorized_is_flagged():
    session = FakeSession(FakeResponse(401, {"message": "Not authorized, token failed"}))
    with pytest.raises(ApiError) as exc:
        client(session).get("/users/profile")
    assert exc.value.is_unauthorized


def test_error_without_json_body_gets_generic_message():
    session = FakeSession(FakeResponse(502, raw=b"<html>bad gateway</html>"))
    with pytest.raises(ApiError) as exc:
        client(session).get("/employees")
    assert exc.value.message == "Request failed with status 502"


def test_transport_failure_becomes_api_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as exc:
        client(session).get("/employees")
    assert exc.value.status_code is None
    assert "Unable to reach" in exc.value.message


def test_empty_body_returns_none_and_malformed_body_raises():
    assert client(FakeSession(FakeResponse(204))).delete("/teams/1") is None

    with pytest.raises(ApiError):
        client(FakeSession(FakeResponse(200, raw=b"not json"))).get("/employees")


def test_unwrap_list_accepts_envelopes_and_bare_arrays():
    assert unwrap_list([1, 2], "employees") == [1, 2]
    assert unwrap_list({"employees": [3]}, "employees") == [3]
    assert unwrap_list({"success": True}, "employees") == []
    assert unwrap_list(None) == []
