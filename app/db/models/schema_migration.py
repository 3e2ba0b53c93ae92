# app/db/models/schema_migration.py
from sqlalchemy import Column, DateTime, Integer, String

from app.db.base import Base, utcnow


class SchemaMigration(Base):
    __tablename__ = "schema_migrations"

    version = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    applied_at = Column(DateTime, default=utcnow)
