# app/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.roles import Role
from app.core.security import get_current_user_id
from app.db.base import get_db
from app.db.models.user import User
from app.db.repositories.catalog import CatalogRepository
from app.db.repositories.feedback import FeedbackRepository
from app.db.repositories.orders import OrderRepository
from app.db.repositories.users import UserRepository
from app.services.authorization import authorize


def get_user_repo(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_catalog_repo(db: Session = Depends(get_db)) -> CatalogRepository:
    return CatalogRepository(db)


def get_order_repo(db: Session = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


def get_feedback_repo(db: Session = Depends(get_db)) -> FeedbackRepository:
    return FeedbackRepository(db)


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    users: UserRepository = Depends(get_user_repo),
) -> User:
    """Authenticated user with any role."""
    user, _ = authorize(users, user_id, Role)
    return user


def require_roles(*allowed: Role):
    """Dependency factory: authenticated user whose canonical role is in `allowed`."""

    def dependency(
        user_id: int = Depends(get_current_user_id),
        users: UserRepository = Depends(get_user_repo),
    ) -> User:
        user, _ = authorize(users, user_id, allowed)
        return user

    return dependency


require_admin = require_roles(Role.ADMIN)
require_staff = require_roles(Role.ADMIN, Role.EMPLOYEE)
