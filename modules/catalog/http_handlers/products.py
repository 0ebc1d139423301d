"""
Products HTTP Handler - CRUD routes for vehicle listings.
"""
from fastapi import APIRouter, Depends

from modules.catalog.services.product_service import ProductService
from shared.models.products_model import ProductCreate, ProductUpdate


router = APIRouter(prefix="/products", tags=["Products"])


# --- Dependencies ---

def get_product_service() -> ProductService:
    """Dependency: Get product service instance."""
    return ProductService()


# --- Routes ---

@router.get("")
def list_products(
    product_service: ProductService = Depends(get_product_service),
):
    """List all products."""
    return [p.model_dump(mode="json") for p in product_service.list_products()]


@router.get("/{product_id}")
def get_product(
    product_id: str,
    product_service: ProductService = Depends(get_product_service),
):
    """Get a single product."""
    return product_service.get_product(product_id).model_dump(mode="json")


@router.post("", status_code=201)
def create_product(
    request: ProductCreate,
    product_service: ProductService = Depends(get_product_service),
):
    """Add a product."""
    product_id = product_service.create_product(request)
    return {"message": "Added successfully", "id": product_id}


@router.put("/{product_id}")
def update_product(
    product_id: str,
    request: ProductUpdate,
    product_service: ProductService = Depends(get_product_service),
):
    """Update the given fields of a product."""
    product_service.update_product(product_id, request)
    return {"message": "Updated successfully"}


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    product_service: ProductService = Depends(get_product_service),
):
    """Delete a product."""
    product_service.delete_product(product_id)
    return {"message": "Deleted successfully"}
