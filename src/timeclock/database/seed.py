"""Reference data provisioned at startup.

Demo identities and work sites; PINs are hashed when applied, never stored in
clear anywhere else.
"""
from __future__ import annotations

import logging

from ..core.enums import Role
from ..projects.repository import ProjectRepository
from ..users.service import CredentialStore

logger = logging.getLogger(__name__)

SEED_USERS = (
    {"id": 1, "name": "John Doe", "phone": "1112223333", "pin": "1234", "role": Role.STAFF},
    {"id": 2, "name": "Jane Smith", "phone": "4445556666", "pin": "5678", "role": Role.STAFF},
    {"id": 3, "name": "Admin User", "phone": "9998887777", "pin": "0000", "role": Role.ADMIN},
)

SEED_PROJECTS = (
    {"id": 101, "name": "Downtown Tower Installation"},
    {"id": 102, "name": "Suburb Shopping Mall Setup"},
    {"id": 103, "name": "Corporate HQ Renovation"},
)


def apply_seed(store: CredentialStore, projects: ProjectRepository, *, users=SEED_USERS, project_rows=SEED_PROJECTS) -> None:
    for u in users:
        store.provision(user_id=u["id"], name=u["name"], phone=u["phone"], role=Role(u["role"]), pin=u["pin"])
    for p in project_rows:
        projects.upsert(project_id=p["id"], name=p["name"])
    logger.info("reference data seeded (%d users, %d projects)", len(users), len(project_rows))
