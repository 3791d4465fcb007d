from __future__ import annotations

import threading
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import Identity
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Process-local identity store. Contents are lost on restart."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, Identity] = {}

    def get_by_id(self, user_id: int) -> Optional[Identity]:
        return self._by_id.get(int(user_id))

    def get_by_phone(self, phone: str) -> Optional[Identity]:
        for user in list(self._by_id.values()):
            if user.phone == phone:
                return user
        return None

    def list_all(self) -> Sequence[Identity]:
        return sorted(self._by_id.values(), key=lambda u: u.id)

    def upsert(self, *, user_id: int, name: str, phone: str, role: Role, pin_hash: str) -> None:
        with self._lock:
            for other in self._by_id.values():
                if other.phone == phone and other.id != user_id:
                    raise ValidationError(f"Phone {phone} already belongs to user {other.id}")
            self._by_id[int(user_id)] = Identity(id=int(user_id), name=name, phone=phone, role=role, pin_hash=pin_hash)
