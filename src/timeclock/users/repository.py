from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Identity


class UserRepository(Protocol):
    """Repository interface for identities.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Identity]:
        raise NotImplementedError

    def get_by_phone(self, phone: str) -> Optional[Identity]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Identity]:
        raise NotImplementedError

    def upsert(self, *, user_id: int, name: str, phone: str, role: Role, pin_hash: str) -> None:
        """Provisioning hook used by seeding."""

        raise NotImplementedError
