# app/db/models/user.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.core.roles import Role as CanonicalRole, resolve_role
from app.db.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, default=int(CanonicalRole.GUEST))

    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)

    # fields edited from the admin panel
    full_name = Column(String, nullable=True)
    birthday = Column(Date, nullable=True)
    discount_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow)

    role = relationship("Role", back_populates="users", lazy="joined")
    orders = relationship("Order", back_populates="user")

    @property
    def role_name(self):
        return self.role.name if self.role else None

    @property
    def canonical_role(self) -> CanonicalRole:
        return resolve_role(self.role_id, self.role_name)
