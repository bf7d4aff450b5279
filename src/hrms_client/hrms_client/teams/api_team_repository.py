from __future__ import annotations

from typing import Optional, Sequence

from ..api.base import ApiRepository, unwrap_list
from ..core.enums import RequestStatus
from ..core.exceptions import ApiError
from .model import Team
from .repository import TeamRepository


def _team(data) -> Team:
    if isinstance(data, dict) and isinstance(data.get("team"), dict):
        data = data["team"]
    return Team.from_api(data if isinstance(data, dict) else {})


class ApiTeamRepository(ApiRepository, TeamRepository):
    def create(self, auth, payload: dict) -> Team:
        return _team(self._client(auth).post("/teams", payload))

    def list_all(self, auth) -> Sequence[Team]:
        data = self._client(auth).get("/teams")
        return [Team.from_api(t) for t in unwrap_list(data, "teams") if isinstance(t, dict)]

    def list_pending(self, auth) -> Sequence[Team]:
        data = self._client(auth).get("/teams/pending")
        return [Team.from_api(t) for t in unwrap_list(data, "teams") if isinstance(t, dict)]

    def get(self, auth, team_id: str) -> Optional[Team]:
        try:
            return _team(self._client(auth).get(f"/teams/{team_id}"))
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    def decide(self, auth, *, team_id: str, status: RequestStatus) -> Team:
        return _team(self._client(auth).put(f"/teams/{team_id}/status", {"status": status.value}))

    def update_members(self, auth, *, team_id: str, payload: dict) -> Team:
        return _team(self._client(auth).put(f"/teams/{team_id}/members", payload))

    def delete(self, auth, team_id: str) -> None:
        self._client(auth).delete(f"/teams/{team_id}")
