from __future__ import annotations

import threading
from typing import Optional, Sequence

from .model import Project
from .repository import ProjectRepository


class InMemoryProjectRepository(ProjectRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, Project] = {}

    def list_all(self) -> Sequence[Project]:
        return sorted(self._by_id.values(), key=lambda p: p.id)

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self._by_id.get(int(project_id))

    def upsert(self, *, project_id: int, name: str) -> None:
        with self._lock:
            self._by_id[int(project_id)] = Project(id=int(project_id), name=name)
