"""
Product catalogue API routes
All store access goes through ProductsService; routes only map results to envelopes.
"""

from fastapi import APIRouter, Depends

from models.product import ProductCreateRequest
from services.base_service import ServiceResult, VALIDATION_ERROR, RESOURCE_NOT_FOUND
from services.products_service import ProductsService, get_products_service
from utils.error_handling import envelope, raise_api_error

router = APIRouter()


def _raise_for_failure(result: ServiceResult) -> None:
    if result.success:
        return
    if result.error_type == RESOURCE_NOT_FOUND:
        raise_api_error(404, result.message)
    if result.error_type == VALIDATION_ERROR:
        raise_api_error(400, result.message)
    # Store errors are reported to the client with the store's own message
    raise_api_error(400, result.message, result.error)


@router.get("")
async def list_products(service: ProductsService = Depends(get_products_service)):
    """List all products, newest first"""
    result = await service.list_products()
    _raise_for_failure(result)
    return envelope(True, data=result.data, total=result.count)


@router.post("", status_code=201)
async def create_product(
    request: ProductCreateRequest,
    service: ProductsService = Depends(get_products_service)
):
    """Create a new product"""
    result = await service.create_product(request)
    _raise_for_failure(result)
    return envelope(True, result.message, data=result.first)


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    service: ProductsService = Depends(get_products_service)
):
    """Delete a product by id"""
    result = await service.delete_product(product_id)
    _raise_for_failure(result)
    return envelope(True, result.message, data=result.first)
