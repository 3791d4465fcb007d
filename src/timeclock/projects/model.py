from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Project:
    """Domain entity: a work site workers clock in against."""

    id: int
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}
