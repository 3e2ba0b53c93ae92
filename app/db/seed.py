# app/db/seed.py
"""Reference data written on first start, and the default service catalog."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core import config
from app.core.roles import Role as CanonicalRole
from app.core.security import hash_password
from app.db.models.category import Category
from app.db.models.role import Role
from app.db.models.service import Service
from app.db.models.user import User
from app.db.repositories.catalog import CatalogRepository
from app.db.repositories.users import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_ROLES = [
    (CanonicalRole.ADMIN, "Administrator with full access"),
    (CanonicalRole.EMPLOYEE, "Company employee with back-office access"),
    (CanonicalRole.GUEST, "Customer with minimal rights"),
]

DEFAULT_CATEGORIES = [
    ("Private homes", "Services for private houses and plots"),
    ("Industry", "Services for industrial sites"),
    ("Waste disposal", "Liquid waste disposal"),
    ("Subscription service", "Regular scheduled maintenance"),
    ("Consulting", "Expert inspection and consulting"),
    ("Emergency calls", "Urgent call-outs and emergencies"),
]

DEFAULT_SERVICES = [
    {
        "title": "Septic tank pumping",
        "description": "Professional pumping of septic tanks and cesspools for private homes",
        "price": 2000,
        "duration": "30-60 minutes",
        "category": "Private homes",
    },
    {
        "title": "Industrial site servicing",
        "description": "Full-service maintenance for industrial sites and plants",
        "price": 5000,
        "duration": "1-2 hours",
        "category": "Industry",
    },
    {
        "title": "Settling tank pumping",
        "description": "Cleaning and pumping of industrial settling tanks of any size",
        "price": 15000,
        "duration": "2-4 hours",
        "category": "Industry",
    },
    {
        "title": "Waste disposal",
        "description": "Safe disposal of liquid household waste to environmental standards",
        "price": 3000,
        "duration": "1-2 hours",
        "category": "Waste disposal",
    },
    {
        "title": "Regular maintenance",
        "description": "Scheduled pumping with a flexible discount plan",
        "price": 1800,
        "duration": "30-60 minutes",
        "category": "Subscription service",
    },
    {
        "title": "Inspection and consulting",
        "description": "Professional assessment of septic and sewer systems",
        "price": 1500,
        "duration": "1 hour",
        "category": "Consulting",
    },
    {
        "title": "Sewer cleaning",
        "description": "Clearing and flushing of sewer lines",
        "price": 2500,
        "duration": "1-3 hours",
        "category": "Private homes",
    },
    {
        "title": "Emergency call-out",
        "description": "Urgent visit for overflows and emergencies",
        "price": 3500,
        "duration": "30-60 minutes",
        "category": "Emergency calls",
    },
]


def _demo_users():
    return [
        ("admin", config.ADMIN_EMAIL, config.ADMIN_PASSWORD, CanonicalRole.ADMIN),
        ("employee", config.EMPLOYEE_EMAIL, config.EMPLOYEE_PASSWORD, CanonicalRole.EMPLOYEE),
        ("guest", config.GUEST_EMAIL, config.GUEST_PASSWORD, CanonicalRole.GUEST),
    ]


def seed_roles(db: Session) -> int:
    users = UserRepository(db)
    if users.count_roles():
        return 0
    # ids are the canonical Role values; roles are never inserted elsewhere
    for role, description in DEFAULT_ROLES:
        db.add(Role(id=int(role), name=role.label, description=description))
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_ROLES)} roles")
    return len(DEFAULT_ROLES)


def seed_categories(db: Session) -> int:
    catalog = CatalogRepository(db)
    if catalog.count_categories():
        return 0
    for name, description in DEFAULT_CATEGORIES:
        db.add(Category(name=name, description=description))
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} categories")
    return len(DEFAULT_CATEGORIES)


def seed_demo_users(db: Session) -> int:
    users = UserRepository(db)
    if users.count():
        return 0
    demo = _demo_users()
    for username, email, password, role in demo:
        db.add(User(username=username, email=email, password=hash_password(password), role_id=int(role)))
    db.commit()
    logger.info(f"Seeded {len(demo)} demo users")
    return len(demo)


def _resolve_category(categories: list[Category], name: str) -> Optional[Category]:
    """
    Match a default category by name. A database seeded under localized names
    keeps the default order, so fall back to the category at the same position.
    """
    for category in categories:
        if category.name == name:
            return category
    position = [n for n, _ in DEFAULT_CATEGORIES].index(name)
    return categories[position] if position < len(categories) else None


def insert_default_services(catalog: CatalogRepository) -> list[Service]:
    """Insert the default catalog without committing. Services whose category is gone are skipped."""
    categories = catalog.list_categories_by_id()
    services = []
    for data in DEFAULT_SERVICES:
        fields = dict(data)
        category = _resolve_category(categories, fields.pop("category"))
        if category is None:
            logger.warning(f"Skipping default service {fields['title']}: no matching category")
            continue
        services.append(catalog.add(Service(category_id=category.id, **fields)))
    return services


def seed_reference_data(db: Session) -> None:
    seed_roles(db)
    seed_categories(db)
    if config.SEED_DEMO_USERS:
        seed_demo_users(db)
