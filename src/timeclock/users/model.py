from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class SafeIdentity:
    """Identity as seen by callers and embedded in tokens (no secret material)."""

    id: int
    name: str
    phone: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "phone": self.phone, "role": self.role.value}


@dataclass(frozen=True)
class Identity:
    """Domain entity: a provisioned user with a hashed PIN.

    Note: Plain data object; ``pin_hash`` must not cross the credential store
    boundary, use :meth:`to_safe` instead.
    """

    id: int
    name: str
    phone: str
    role: Role
    pin_hash: str

    def to_safe(self) -> SafeIdentity:
        return SafeIdentity(id=self.id, name=self.name, phone=self.phone, role=self.role)

    def __repr__(self) -> str:
        return f"Identity(id={self.id!r}, name={self.name!r}, phone={self.phone!r}, role={self.role!r})"
