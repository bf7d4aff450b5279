from __future__ import annotations

from typing import Optional, Sequence

from ..auth.model import AuthSession
from ..common.validators import require_non_empty
from ..core.enums import RequestStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Team
from .repository import TeamRepository


class TeamService:
    def __init__(self, teams: TeamRepository):
        self._teams = teams

    def create(
        self,
        auth: AuthSession,
        *,
        team_name: str,
        description: str = "",
        member_ids: Sequence[str] = (),
        team_leader: Optional[str] = None,
    ) -> Team:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("Only Admin/HR can create teams")
        payload = {
            "team_name": require_non_empty(team_name, "Team name"),
            "description": (description or "").strip(),
            "members": [{"user": uid, "role": "Member"} for uid in _dedupe(member_ids)],
        }
        if team_leader:
            payload["team_leader"] = team_leader
        return self._teams.create(auth, payload)

    def list_teams(self, auth: AuthSession) -> Sequence[Team]:
        return self._teams.list_all(auth)

    def pending(self, auth: AuthSession) -> Sequence[Team]:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to review teams")
        return self._teams.list_pending(auth)

    def get(self, auth: AuthSession, team_id: str) -> Team:
        team = self._teams.get(auth, team_id)
        if not team:
            raise NotFoundError("Team not found")
        return team

    def decide(self, auth: AuthSession, *, team_id: str, status: str) -> Team:
        if not auth.is_admin_or_hr:
            raise AuthorizationError("You are not allowed to review teams")
        try:
            decision = RequestStatus(status)
        except ValueError:
            raise ValidationError("Invalid decision")
        if decision == RequestStatus.PENDING:
            raise ValidationError("A team can only be approved or rejected")
        return self._teams.decide(auth, team_id=team_id, status=decision)

    def update_members(
        self,
        auth: AuthSession,
        *,
        team_id: str,
        member_ids: Sequence[str],
        team_leader: Optional[str] = None,
    ) -> Team:
        payload: dict = {"members": [{"user": uid, "role": "Member"} for uid in _dedupe(member_ids)]}
        if team_leader:
            if team_leader not in payload_member_ids(payload):
                payload["members"].append({"user": team_leader, "role": "Leader"})
            payload["team_leader"] = team_leader
        return self._teams.update_members(auth, team_id=team_id, payload=payload)

    def delete(self, auth: AuthSession, team_id: str) -> None:
        self._teams.delete(auth, require_non_empty(team_id, "Team"))


def payload_member_ids(payload: dict) -> list[str]:
    return [m["user"] for m in payload.get("members", [])]


def _dedupe(ids: Sequence[str]) -> list[str]:
    seen: list[str] = []
    for i in ids:
        i = (i or "").strip()
        if i and i not in seen:
            seen.append(i)
    return seen
