# app/services/authorization.py
import logging
from typing import Iterable

from app.core.errors import ForbiddenError, NotFoundError
from app.core.roles import Role
from app.db.models.user import User

logger = logging.getLogger(__name__)


def authorize(users, user_id: int, allowed: Iterable[Role]) -> tuple[User, Role]:
    """
    Allow the user when their canonical role is in `allowed`.

    `users` is anything with a `get(user_id)` returning an object that exposes
    `canonical_role`. Returns (user, role) or raises NotFoundError /
    ForbiddenError.
    """
    allowed = frozenset(allowed)
    user = users.get(user_id)
    if user is None:
        raise NotFoundError("User not found")

    role = user.canonical_role
    if role not in allowed:
        logger.warning(
            f"Denied user {user_id} with role {role.label}; allowed: {sorted(r.label for r in allowed)}"
        )
        raise ForbiddenError()
    return user, role
