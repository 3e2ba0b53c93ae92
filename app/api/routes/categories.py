from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_catalog_repo
from app.db.repositories.catalog import CatalogRepository
from app.schemas.service import CategoryResponse
from app.services import catalog as catalog_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponse])
def list_categories(catalog: CatalogRepository = Depends(get_catalog_repo)):
    return catalog_service.list_categories(catalog)
