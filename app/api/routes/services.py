# app/api/routes/services.py

from typing import List

from fastapi import APIRouter, Depends, status

from app.api.deps import get_catalog_repo, require_admin, require_staff
from app.db.models.user import User
from app.db.repositories.catalog import CatalogRepository
from app.schemas.service import ServiceDeleted, ServicePayload, ServiceResponse, ServicesSeeded
from app.services import catalog as catalog_service

router = APIRouter(tags=["services"])


# Public catalog

@router.get("/services", response_model=List[ServiceResponse])
def list_services(catalog: CatalogRepository = Depends(get_catalog_repo)):
    return catalog_service.list_services(catalog)


# Staff creates service

@router.post("/services", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(
    payload: ServicePayload,
    catalog: CatalogRepository = Depends(get_catalog_repo),
    current_user: User = Depends(require_staff),
):
    return catalog_service.create_service(catalog, **payload.model_dump())


# Staff updates service

@router.put("/services/{service_id}", response_model=ServiceResponse)
def update_service(
    service_id: int,
    payload: ServicePayload,
    catalog: CatalogRepository = Depends(get_catalog_repo),
    current_user: User = Depends(require_staff),
):
    return catalog_service.update_service(catalog, service_id, **payload.model_dump())


# Admin deletes service (refused while orders reference it)

@router.delete("/services/{service_id}", response_model=ServiceDeleted)
def delete_service(
    service_id: int,
    catalog: CatalogRepository = Depends(get_catalog_repo),
    current_user: User = Depends(require_admin),
):
    return catalog_service.delete_service(catalog, service_id)


# Admin fills an empty catalog with the default services

@router.post("/init/services", response_model=ServicesSeeded)
def init_services(
    catalog: CatalogRepository = Depends(get_catalog_repo),
    current_user: User = Depends(require_admin),
):
    return catalog_service.seed_default_services(catalog)


@router.post("/restore-services", response_model=ServicesSeeded)
def restore_services(
    catalog: CatalogRepository = Depends(get_catalog_repo),
    current_user: User = Depends(require_admin),
):
    return catalog_service.restore_services(catalog)
