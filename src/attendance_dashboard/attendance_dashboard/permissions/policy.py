from __future__ import annotations

import logging

from ..core.enums import Capability
from ..core.exceptions import AuthorizationError
from .model import PermissionSet

logger = logging.getLogger(__name__)

DENIED_MESSAGES = {
    Capability.VIEW_ATTENDANCE: "You do not have permission to view attendance data.",
    Capability.WRITE_ATTENDANCE: "You do not have permission to write attendance records.",
    Capability.EXPORT_DATA: "You do not have permission to export data.",
    Capability.MANAGE_EMPLOYEES: "You do not have permission to manage employees.",
    Capability.MANAGE_ADMINS: "You do not have permission to manage admin users.",
    Capability.SUPER_ADMIN: "Only a super admin can do this.",
}


def require(permissions: PermissionSet, capability: Capability) -> None:
    """Raise AuthorizationError unless the set allows the capability."""
    if not permissions.allows(capability):
        logger.info("Permission denied: %s (loading=%s)", capability.value, permissions.loading)
        raise AuthorizationError(DENIED_MESSAGES[capability])
