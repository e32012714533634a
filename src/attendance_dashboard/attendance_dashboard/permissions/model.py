from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.enums import Capability

FLAG_NAMES = tuple(c.value for c in Capability)


@dataclass(frozen=True)
class PermissionSet:
    """The six stored capability flags of one principal.

    Raw fields hold what is stored. Gating must go through ``allows`` so
    that ``is_super_admin`` implies every other flag, and an unresolved
    (still loading) set denies everything.
    """

    can_view_attendance: bool = False
    can_write_attendance: bool = False
    can_export_data: bool = False
    can_manage_employees: bool = False
    can_manage_admins: bool = False
    is_super_admin: bool = False
    loading: bool = False

    @classmethod
    def none(cls) -> "PermissionSet":
        return cls()

    @classmethod
    def unresolved(cls) -> "PermissionSet":
        return cls(loading=True)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PermissionSet":
        if not data:
            return cls.none()
        return cls(**{name: bool(data.get(name) or False) for name in FLAG_NAMES})

    def to_dict(self) -> dict[str, bool]:
        return {name: bool(getattr(self, name)) for name in FLAG_NAMES}

    def allows(self, capability: Capability) -> bool:
        if self.loading:
            return False
        if self.is_super_admin:
            return True
        return bool(getattr(self, capability.value))

    def effective(self) -> dict[str, bool]:
        """Flags as the UI should show them (super admin forces all on)."""
        return {c.value: self.allows(c) for c in Capability}


@dataclass(frozen=True)
class AdminAccount:
    user_id: int
    email: str
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None
    permissions: PermissionSet = field(default_factory=PermissionSet)
