from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..common.coerce import optional_str
from ..core.enums import RequestStatus
from ..employees.model import EmployeeBrief


@dataclass(frozen=True)
class TeamMember:
    user: Optional[EmployeeBrief]
    role: str = "Member"


@dataclass(frozen=True)
class Team:
    id: str
    team_name: str
    status: Union[RequestStatus, str]
    description: str = ""
    team_leader: Optional[EmployeeBrief] = None
    created_by: Optional[EmployeeBrief] = None
    members: tuple[TeamMember, ...] = field(default_factory=tuple)

    def member_ids(self) -> list[str]:
        return [m.user.id for m in self.members if m.user and m.user.id]

    @classmethod
    def from_api(cls, data: dict) -> "Team":
        try:
            status = RequestStatus(data.get("status") or RequestStatus.PENDING.value)
        except ValueError:
            status = str(data.get("status"))
        members = tuple(
            TeamMember(user=EmployeeBrief.from_api(m.get("user")), role=str(m.get("role") or "Member"))
            for m in (data.get("members") or [])
            if isinstance(m, dict)
        )
        return cls(
            id=str(data.get("_id") or ""),
            team_name=str(data.get("team_name") or ""),
            status=status,
            description=optional_str(data.get("description")) or "",
            team_leader=EmployeeBrief.from_api(data.get("team_leader")),
            created_by=EmployeeBrief.from_api(data.get("created_by")),
            members=members,
        )
