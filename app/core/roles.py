# app/core/roles.py
from enum import IntEnum
from typing import Optional


class Role(IntEnum):
    """Canonical roles. The values are the seeded ids in the roles table."""

    ADMIN = 1
    EMPLOYEE = 2
    GUEST = 3

    @property
    def label(self) -> str:
        return self.name.lower()


# Role names have drifted across deployments and locales
ROLE_SYNONYMS = {
    "admin": Role.ADMIN,
    "administrator": Role.ADMIN,
    "администратор": Role.ADMIN,
    "админ": Role.ADMIN,
    "employee": Role.EMPLOYEE,
    "сотрудник": Role.EMPLOYEE,
    "работник": Role.EMPLOYEE,
    "guest": Role.GUEST,
    "гость": Role.GUEST,
}

STAFF_ROLES = frozenset({Role.ADMIN, Role.EMPLOYEE})


def role_from_name(name: Optional[str]) -> Optional[Role]:
    if not name:
        return None
    return ROLE_SYNONYMS.get(name.strip().lower())


def resolve_role(role_id: Optional[int], role_name: Optional[str] = None) -> Role:
    """
    Resolve a stored (role_id, role name) pair to its canonical Role.
    Ids 1 and 2 are authoritative; anything else goes through the synonym
    table and falls back to guest.
    """
    if role_id == Role.ADMIN:
        return Role.ADMIN
    if role_id == Role.EMPLOYEE:
        return Role.EMPLOYEE
    return role_from_name(role_name) or Role.GUEST


def parse_role_id(value) -> Optional[Role]:
    try:
        return Role(int(value))
    except (TypeError, ValueError):
        return None
