from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee and their single upward link.

    ``manager_id`` is the Chapter Lead a Reporter reports to. It carries no
    meaning for leads: Chapter Leads report to the Tribe Lead implicitly.
    """

    user_id: str
    name: str
    email: str
    role: Role
    manager_id: Optional[str] = None
    team_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "manager_id": self.manager_id,
            "team_name": self.team_name,
        }


# The authenticated user performing an action.
Principal = User
