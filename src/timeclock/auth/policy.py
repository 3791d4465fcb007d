from __future__ import annotations

from ..core.enums import Operation, Role
from ..core.exceptions import AccessDenied

# (operation, role) -> allowed. Anything missing is denied.
PERMISSIONS: dict[tuple[Operation, Role], bool] = {
    (Operation.GET_SELF, Role.STAFF): True,
    (Operation.GET_SELF, Role.ADMIN): True,
    (Operation.GET_ACTIVE_RECORD, Role.STAFF): True,
    (Operation.GET_ACTIVE_RECORD, Role.ADMIN): True,
    (Operation.GET_HISTORY, Role.STAFF): True,
    (Operation.GET_HISTORY, Role.ADMIN): True,
    (Operation.CLOCK_IN, Role.STAFF): True,
    (Operation.CLOCK_IN, Role.ADMIN): True,
    (Operation.CLOCK_OUT, Role.STAFF): True,
    (Operation.CLOCK_OUT, Role.ADMIN): True,
    (Operation.LIST_PROJECTS, Role.STAFF): True,
    (Operation.LIST_PROJECTS, Role.ADMIN): True,
    (Operation.LIST_ATTENDANCE, Role.STAFF): False,
    (Operation.LIST_ATTENDANCE, Role.ADMIN): True,
}


def is_allowed(operation: Operation, role: Role) -> bool:
    return PERMISSIONS.get((operation, role), False)


def require_allowed(operation: Operation, role: Role) -> None:
    if not is_allowed(operation, role):
        raise AccessDenied()
