# app/services/catalog.py
import logging
from typing import Optional

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.db.models.service import Service
from app.db.repositories.catalog import CatalogRepository
from app.db.seed import insert_default_services

logger = logging.getLogger(__name__)


def service_to_dict(service: Service) -> dict:
    return {
        "id": service.id,
        "title": service.title,
        "description": service.description,
        "price": service.price,
        "duration": service.duration,
        "category": service.category_name,
        "category_id": service.category_id,
    }


def _validate_fields(
    catalog: CatalogRepository,
    title: Optional[str],
    description: Optional[str],
    price: Optional[float],
    duration: Optional[str],
    category_id: Optional[int],
) -> None:
    if not title or not description or price is None or not duration or not category_id:
        raise ValidationError("All fields are required")
    if price <= 0:
        raise ValidationError("Price must be positive")
    if catalog.get_category(category_id) is None:
        raise NotFoundError("Category not found")


def list_categories(catalog: CatalogRepository):
    return catalog.list_categories()


def list_services(catalog: CatalogRepository) -> list[dict]:
    return [service_to_dict(s) for s in catalog.list_services()]


def create_service(
    catalog: CatalogRepository,
    title: Optional[str],
    description: Optional[str],
    price: Optional[float],
    duration: Optional[str],
    category_id: Optional[int],
) -> dict:
    _validate_fields(catalog, title, description, price, duration, category_id)

    service = catalog.add(
        Service(
            title=title,
            description=description,
            price=price,
            duration=duration,
            category_id=category_id,
        )
    )
    catalog.commit()
    catalog.refresh(service)
    logger.info(f"Created service {service.id} ({service.title})")
    return service_to_dict(service)


def update_service(
    catalog: CatalogRepository,
    service_id: int,
    title: Optional[str],
    description: Optional[str],
    price: Optional[float],
    duration: Optional[str],
    category_id: Optional[int],
) -> dict:
    _validate_fields(catalog, title, description, price, duration, category_id)

    service = catalog.get_service(service_id)
    if not service:
        raise NotFoundError("Service not found")

    service.title = title
    service.description = description
    service.price = price
    service.duration = duration
    service.category_id = category_id
    catalog.commit()
    catalog.refresh(service)
    return service_to_dict(service)


def delete_service(catalog: CatalogRepository, service_id: int) -> dict:
    """Delete a service nobody has ordered. Check and delete share one transaction."""
    count = catalog.count_orders_for_service(service_id)
    if count > 0:
        raise ConflictError("Cannot delete a service that is used in orders", count=count)

    if catalog.delete_service(service_id) == 0:
        catalog.rollback()
        raise NotFoundError("Service not found")

    catalog.commit()
    logger.info(f"Deleted service {service_id}")
    return {"message": "Service deleted", "id": service_id}


def seed_default_services(catalog: CatalogRepository) -> dict:
    if catalog.count_services() > 0:
        raise ConflictError("Services already exist")

    if catalog.count_categories() == 0:
        raise ValidationError("Add service categories first")

    services = insert_default_services(catalog)
    catalog.commit()
    logger.info(f"Seeded {len(services)} default services")
    return {"message": "Services added", "count": len(services)}


def restore_services(catalog: CatalogRepository) -> dict:
    count = catalog.count_services()
    if count > 0:
        raise ConflictError("Services already exist", count=count)

    if catalog.count_categories() == 0:
        raise ValidationError("Add service categories first")

    services = insert_default_services(catalog)
    catalog.commit()
    for service in services:
        catalog.refresh(service)
    logger.info(f"Restored {len(services)} default services")
    return {
        "message": "Services restored",
        "count": len(services),
        "services": [service_to_dict(s) for s in services],
    }
