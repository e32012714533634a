from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AdminAccount, PermissionSet


class PermissionRepository(Protocol):
    """Storage for per-principal permission records.

    ``get`` returns None when the principal has no record; that is not an
    error. Any other failure raises BackendError.
    """

    def get(self, user_id: int) -> Optional[PermissionSet]:
        raise NotImplementedError

    def upsert(self, *, user_id: int, permissions: PermissionSet, updated_by: Optional[int]) -> None:
        raise NotImplementedError

    def delete(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_admins(self) -> Sequence[AdminAccount]:
        raise NotImplementedError
