"""
Versioned schema migrations.

Each migration runs once, in version order, inside its own transaction, and is
recorded in the schema_migrations table. The table definitions below are
frozen at the version that introduced them; later columns arrive through
their own migration, never by editing an earlier one. Every step checks what
already exists so that a database created by the legacy Node server (tables
present, no version rows) is adopted in place.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    func,
    inspect,
    select,
    text,
)
from sqlalchemy.engine import Connection, Engine

from app.db.base import utcnow
from app.db.models import SchemaMigration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    upgrade: Callable[[Connection], None]


def _core_tables(metadata: MetaData) -> list[Table]:
    """Tables as of version 1 (the legacy server's layout)."""
    roles = Table(
        "roles",
        metadata,
        Column("id", Integer, primary_key=True, index=True),
        Column("name", String, nullable=False, unique=True),
        Column("description", String, nullable=False),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
    )
    users = Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True, index=True),
        Column("username", String, unique=True, nullable=False),
        Column("email", String, unique=True, index=True, nullable=False),
        Column("password", String, nullable=False),
        Column("role_id", Integer, ForeignKey("roles.id"), nullable=False),
        Column("phone", String),
        Column("address", String),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
    )
    categories = Table(
        "categories",
        metadata,
        Column("id", Integer, primary_key=True, index=True),
        Column("name", String, nullable=False, unique=True),
        Column("description", String, nullable=False),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
    )
    services = Table(
        "services",
        metadata,
        Column("id", Integer, primary_key=True, index=True),
        Column("category_id", Integer, ForeignKey("categories.id"), nullable=False),
        Column("title", String, nullable=False),
        Column("description", String, nullable=False),
        Column("price", Numeric(10, 2), nullable=False),
        Column("duration", String, nullable=False),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
    )
    orders = Table(
        "orders",
        metadata,
        Column("id", Integer, primary_key=True, index=True),
        Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
        Column("service_id", Integer, ForeignKey("services.id"), nullable=False),
        Column("status", String, nullable=False, server_default="pending"),
        Column("discount_applied", Boolean, nullable=False, server_default=text("0")),
        Column("final_price", Numeric(10, 2), nullable=False),
        Column("address", String),
        Column("scheduled_time", DateTime, nullable=False),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
    )
    return [roles, users, categories, services, orders]


def _feedback_table(metadata: MetaData) -> Table:
    """Feedback as of version 2: order_id is NULL for general feedback."""
    return Table(
        "feedback",
        metadata,
        Column("id", Integer, primary_key=True, index=True),
        Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
        Column("order_id", Integer, ForeignKey("orders.id"), nullable=True, unique=True),
        Column("rating", Integer, nullable=False),
        Column("comment", String),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating"),
    )


def _column_names(conn: Connection, table: str) -> set[str]:
    return {c["name"] for c in inspect(conn).get_columns(table)}


def _add_missing_columns(conn: Connection, table: str, columns: list[tuple[str, str]]) -> None:
    existing = _column_names(conn, table)
    for name, ddl in columns:
        if name in existing:
            continue
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {ddl}"))
        logger.info(f"Added column {table}.{name}")


def _create_core_tables(conn: Connection) -> None:
    metadata = MetaData()
    tables = _core_tables(metadata)
    metadata.create_all(bind=conn, tables=tables, checkfirst=True)


def _create_feedback_table(conn: Connection) -> None:
    if not inspect(conn).has_table("feedback"):
        metadata = MetaData()
        _core_tables(metadata)
        _feedback_table(metadata).create(bind=conn)
        return

    order_id = next(c for c in inspect(conn).get_columns("feedback") if c["name"] == "order_id")
    if order_id["nullable"]:
        return

    # legacy table: order_id NOT NULL, general feedback stored as order 0
    logger.info("Rebuilding legacy feedback table")
    conn.execute(text("ALTER TABLE feedback RENAME TO feedback_legacy"))
    metadata = MetaData()
    _core_tables(metadata)
    _feedback_table(metadata).create(bind=conn)
    conn.execute(
        text(
            """
            INSERT INTO feedback (id, user_id, order_id, rating, comment, created_at)
            SELECT id, user_id, NULLIF(order_id, 0), rating, comment, created_at
            FROM feedback_legacy
            """
        )
    )
    conn.execute(text("DROP TABLE feedback_legacy"))


def _index_orders_by_status_and_time(conn: Connection) -> None:
    conn.execute(
        text(
            """
            CREATE INDEX IF NOT EXISTS ix_orders_status_scheduled_time
            ON orders (status, scheduled_time)
            """
        )
    )


def _add_user_profile_columns(conn: Connection) -> None:
    _add_missing_columns(
        conn,
        "users",
        [
            ("full_name", "VARCHAR"),
            ("birthday", "DATE"),
            ("discount_amount", "NUMERIC(10, 2) NOT NULL DEFAULT 0"),
        ],
    )


def _add_order_address_column(conn: Connection) -> None:
    _add_missing_columns(conn, "orders", [("address", "VARCHAR")])


MIGRATIONS = [
    Migration(1, "core tables", _create_core_tables),
    Migration(2, "feedback table", _create_feedback_table),
    Migration(3, "orders status/scheduled_time index", _index_orders_by_status_and_time),
    Migration(4, "user profile columns", _add_user_profile_columns),
    Migration(5, "order address column", _add_order_address_column),
]


def applied_versions(engine: Engine) -> set[int]:
    with engine.connect() as conn:
        return set(conn.execute(select(SchemaMigration.version)).scalars())


def apply_migrations(engine: Engine, migrations=None) -> list[int]:
    """
    Apply every pending migration. Returns the versions applied by this call.
    A failing migration is logged and stops the run; later ones stay pending.
    """
    migrations = sorted(MIGRATIONS if migrations is None else migrations, key=lambda m: m.version)
    SchemaMigration.__table__.create(bind=engine, checkfirst=True)

    done = applied_versions(engine)
    applied = []
    for migration in migrations:
        if migration.version in done:
            continue
        try:
            with engine.begin() as conn:
                migration.upgrade(conn)
                conn.execute(
                    SchemaMigration.__table__.insert().values(
                        version=migration.version,
                        name=migration.name,
                        applied_at=utcnow(),
                    )
                )
        except Exception:
            logger.exception(f"Migration {migration.version} ({migration.name}) failed")
            break
        logger.info(f"Applied migration {migration.version}: {migration.name}")
        applied.append(migration.version)

    if not applied:
        logger.info("Database schema is up to date")
    return applied
