from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.enums import Capability
from ..core.exceptions import BackendError, NotFoundError
from .model import AdminAccount, PermissionSet
from .policy import require
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Holds the current principal's capability set for one session.

    The set starts unresolved (every check denied) until ``load`` succeeds.
    A missing record resolves to all-false; a backend failure leaves the
    resolver unresolved and re-raises.
    """

    def __init__(
        self,
        permissions: PermissionRepository,
        *,
        principal_id: Optional[int] = None,
        current: Optional[PermissionSet] = None,
    ):
        self._permissions = permissions
        self._principal_id = principal_id
        self._current = current

    @property
    def principal_id(self) -> Optional[int]:
        return self._principal_id

    @property
    def current(self) -> PermissionSet:
        if self._current is None:
            return PermissionSet.unresolved()
        return self._current

    @property
    def resolved(self) -> bool:
        return self._current is not None

    def load(self, principal_id: int) -> PermissionSet:
        self._principal_id = int(principal_id)
        self._current = None
        try:
            stored = self._permissions.get(self._principal_id)
        except BackendError:
            logger.error("Could not load permissions for principal %s", self._principal_id)
            raise

        self._current = stored if stored is not None else PermissionSet.none()
        return self._current

    def update(self, target_user_id: int, new_set: PermissionSet) -> PermissionSet:
        require(self.current, Capability.MANAGE_ADMINS)

        new_set = PermissionSet.from_dict(new_set.to_dict())
        self._permissions.upsert(
            user_id=int(target_user_id),
            permissions=new_set,
            updated_by=self._principal_id,
        )
        logger.info("Principal %s updated permissions of %s", self._principal_id, target_user_id)

        if self._principal_id is not None and int(target_user_id) == self._principal_id:
            self._current = new_set
        return new_set

    def revoke(self, target_user_id: int) -> None:
        require(self.current, Capability.MANAGE_ADMINS)

        if not self._permissions.delete(int(target_user_id)):
            raise NotFoundError("Admin has no permissions to remove")
        logger.info("Principal %s revoked permissions of %s", self._principal_id, target_user_id)

        if self._principal_id is not None and int(target_user_id) == self._principal_id:
            self._current = PermissionSet.none()

    def list_admins(self) -> Sequence[AdminAccount]:
        require(self.current, Capability.MANAGE_ADMINS)
        return self._permissions.list_admins()
