from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id, project_name FROM projects ORDER BY project_id")
            return [Project(id=int(r["project_id"]), name=r["project_name"]) for r in fetchall(cur)]

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT project_id, project_name FROM projects WHERE project_id=%s",
                (int(project_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Project(id=int(r["project_id"]), name=r["project_name"])

    def upsert(self, *, project_id: int, name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(project_id, project_name)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE project_name=VALUES(project_name)
                """,
                (int(project_id), name),
            )
