"""
Product store access - the only place that talks to the database
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

import asyncpg

from database.connection import get_db_pool
from models.product import ProductCreate
from utils.helpers import serialize_row

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = "id, nome, preco, descricao, created_at"


class StoreError(RuntimeError):
    """The store rejected or failed an operation; the message is the store's own"""


class ProductRepository(ABC):
    """Narrow interface over the products table"""

    @abstractmethod
    async def list_products(self) -> List[Dict[str, Any]]:
        """All products, newest first"""

    @abstractmethod
    async def create_product(self, product: ProductCreate) -> Dict[str, Any]:
        """Insert a product and return the stored row"""

    @abstractmethod
    async def delete_product(self, product_id: int) -> List[Dict[str, Any]]:
        """Delete by id and return the deleted rows (empty when nothing matched)"""


class PostgresProductRepository(ProductRepository):
    """ProductRepository backed by the shared asyncpg pool"""

    def __init__(self, pool_getter: Callable[[], Optional[asyncpg.Pool]] = get_db_pool):
        self._pool_getter = pool_getter

    async def _fetch(self, operation: str, query: str, *params) -> List[Dict[str, Any]]:
        db_pool = self._pool_getter()
        if not db_pool:
            raise StoreError("Database pool not initialized")

        logger.debug(f"Executing {operation}: {query}")
        try:
            async with db_pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Database error during {operation}: {e}")
            raise StoreError(str(e)) from e

        return [serialize_row(row) for row in rows]

    async def list_products(self) -> List[Dict[str, Any]]:
        return await self._fetch(
            "SELECT",
            f"SELECT {PRODUCT_COLUMNS} FROM produtos ORDER BY created_at DESC, id DESC"
        )

    async def create_product(self, product: ProductCreate) -> Dict[str, Any]:
        rows = await self._fetch(
            "INSERT",
            f"INSERT INTO produtos (nome, preco, descricao) VALUES ($1, $2, $3) RETURNING {PRODUCT_COLUMNS}",
            product.nome, product.preco, product.descricao
        )
        if not rows:
            raise StoreError("Insert operation failed - no data returned")
        return rows[0]

    async def delete_product(self, product_id: int) -> List[Dict[str, Any]]:
        return await self._fetch(
            "DELETE",
            f"DELETE FROM produtos WHERE id = $1 RETURNING {PRODUCT_COLUMNS}",
            product_id
        )
