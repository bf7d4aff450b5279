from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import Team


class TeamRepository(Protocol):
    def create(self, auth, payload: dict) -> Team:
        raise NotImplementedError

    def list_all(self, auth) -> Sequence[Team]:
        raise NotImplementedError

    def list_pending(self, auth) -> Sequence[Team]:
        raise NotImplementedError

    def get(self, auth, team_id: str) -> Optional[Team]:
        raise NotImplementedError

    def decide(self, auth, *, team_id: str, status: RequestStatus) -> Team:
        raise NotImplementedError

    def update_members(self, auth, *, team_id: str, payload: dict) -> Team:
        raise NotImplementedError

    def delete(self, auth, team_id: str) -> None:
        raise NotImplementedError
