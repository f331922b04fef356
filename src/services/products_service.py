"""
Products service - validation and delegation for the product catalogue
"""

import logging
from typing import Any, Optional

from models.product import ProductCreate, ProductCreateRequest
from services.base_service import ServiceResult, VALIDATION_ERROR, STORE_ERROR, RESOURCE_NOT_FOUND
from services.product_repository import ProductRepository, PostgresProductRepository, StoreError
from utils.helpers import parse_price, parse_record_id

logger = logging.getLogger(__name__)

MSG_REQUIRED = "Nome e preço são obrigatórios"
MSG_INVALID_NAME = "Nome deve ser um texto"
MSG_INVALID_PRICE = "Preço deve ser um número maior que zero"
MSG_INVALID_DESCRIPTION = "Descrição deve ser um texto"
MSG_INVALID_ID = "ID deve ser um número válido"
MSG_NOT_FOUND = "Produto não encontrado"
MSG_LIST_FAILED = "Erro ao buscar produtos"
MSG_CREATE_FAILED = "Erro ao cadastrar produto"
MSG_DELETE_FAILED = "Erro ao excluir produto"
MSG_CREATED = "Produto cadastrado com sucesso!"
MSG_DELETED = "Produto excluído com sucesso!"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return value is False or value == 0


class ProductsService:
    """Service for product catalogue operations"""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def validate_create(self, request: ProductCreateRequest) -> ProductCreate:
        """
        Check a raw create payload and return the normalized values.

        Raises:
            ValueError: with the user-facing message when the payload is invalid
        """
        if _is_blank(request.nome) or _is_blank(request.preco):
            raise ValueError(MSG_REQUIRED)
        if not isinstance(request.nome, str):
            raise ValueError(MSG_INVALID_NAME)
        if not _is_blank(request.descricao) and not isinstance(request.descricao, str):
            raise ValueError(MSG_INVALID_DESCRIPTION)

        try:
            price = parse_price(request.preco)
        except ValueError:
            raise ValueError(MSG_INVALID_PRICE)

        description: Optional[str] = request.descricao.strip() if isinstance(request.descricao, str) else None
        return ProductCreate(
            nome=request.nome.strip(),
            preco=price,
            descricao=description or None
        )

    async def list_products(self) -> ServiceResult:
        """Fetch every product, newest first"""
        logger.info("Listing products")
        try:
            products = await self.repository.list_products()
        except StoreError as e:
            return ServiceResult.failure(STORE_ERROR, MSG_LIST_FAILED, str(e))

        logger.info(f"{len(products)} products found")
        return ServiceResult.ok(products)

    async def create_product(self, request: ProductCreateRequest) -> ServiceResult:
        """
        Validate and insert a new product

        Args:
            request: raw payload with nome, preco and optional descricao

        Returns:
            ServiceResult with the created record as echoed by the store
        """
        try:
            product = self.validate_create(request)
        except ValueError as e:
            logger.warning(f"Rejected product payload: {e}")
            return ServiceResult.failure(VALIDATION_ERROR, str(e))

        logger.info(f"Creating product: {product.nome} ({product.preco})")
        try:
            created = await self.repository.create_product(product)
        except StoreError as e:
            return ServiceResult.failure(STORE_ERROR, MSG_CREATE_FAILED, str(e))

        logger.info(f"Product created with id {created.get('id')}")
        return ServiceResult.ok([created], MSG_CREATED)

    async def delete_product(self, raw_id: str) -> ServiceResult:
        """Delete a product by its path-embedded id"""
        try:
            product_id = parse_record_id(raw_id)
        except ValueError:
            logger.warning(f"Rejected product id: {raw_id!r}")
            return ServiceResult.failure(VALIDATION_ERROR, MSG_INVALID_ID)

        logger.info(f"Deleting product id {product_id}")
        try:
            deleted = await self.repository.delete_product(product_id)
        except StoreError as e:
            return ServiceResult.failure(STORE_ERROR, MSG_DELETE_FAILED, str(e))

        if not deleted:
            return ServiceResult.failure(RESOURCE_NOT_FOUND, MSG_NOT_FOUND)

        return ServiceResult.ok(deleted[:1], MSG_DELETED)


# Global service instance
_products_service: Optional[ProductsService] = None

def get_products_service() -> ProductsService:
    """Get the global products service instance"""
    global _products_service
    if _products_service is None:
        _products_service = ProductsService(PostgresProductRepository())
    return _products_service
