# app/db/repositories/users.py
from typing import List, Optional

from sqlalchemy import func, or_, select

from app.db.models.role import Role
from app.db.models.user import User
from app.db.repositories.base import SqlRepository


class UserRepository(SqlRepository):

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def find_taken(self, username: str, email: str, exclude_id: Optional[int] = None) -> Optional[User]:
        """First user other than exclude_id holding this username or email."""
        stmt = select(User).where(or_(User.username == username, User.email == email))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.db.scalars(stmt).first()

    def list_newest_first(self) -> List[User]:
        return list(self.db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc())))

    def count(self) -> int:
        return self.db.scalar(select(func.count(User.id))) or 0

    def count_roles(self) -> int:
        return self.db.scalar(select(func.count(Role.id))) or 0
