from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Optional

from ..common.coerce import optional_str
from ..core.enums import Role


@dataclass(frozen=True)
class AuthSession:
    """The logged-in user as issued by ``/auth/login`` or ``/auth/register``.

    Created at login, replaced wholesale on profile update, cleared at logout.
    It is passed explicitly to services; nothing reads it from ambient state
    except the controller layer, which keeps it in the Flask session cookie.
    """

    user_id: str
    name: str
    email: str
    employee_id: str
    role: Role
    token: str
    profile_picture: Optional[str] = None

    @property
    def is_admin_or_hr(self) -> bool:
        return self.role in (Role.ADMIN, Role.HR_OFFICER)

    @classmethod
    def from_api(cls, data: dict) -> "AuthSession":
        return cls(
            user_id=str(data.get("_id") or data.get("id") or ""),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            employee_id=str(data.get("employee_id") or ""),
            role=Role(data.get("role") or Role.EMPLOYEE.value),
            token=str(data.get("token") or ""),
            profile_picture=optional_str(data.get("profile_picture")),
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["role"] = self.role.value
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "AuthSession":
        return cls(**{**data, "role": Role(data["role"])})

    def updated(self, *, name: Optional[str] = None, profile_picture: Optional[str] = None) -> "AuthSession":
        """Return a new session reflecting a profile update."""
        return replace(
            self,
            name=name or self.name,
            profile_picture=profile_picture or self.profile_picture,
        )
