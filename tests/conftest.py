"""
pytest configuration and fixtures for the products API and client suites
No database required: the store is replaced by an in-memory repository.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List

import httpx
import pytest
import pytest_asyncio

# Settings refuse to load without these
os.environ.setdefault("DATABASE_URL", "postgresql://padaria@localhost:5432/padaria")
os.environ.setdefault("DATABASE_PASSWORD", "test-password")

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from app import app
from models.product import ProductCreate
from services.product_repository import ProductRepository, StoreError
from services.products_service import ProductsService, get_products_service
from utils.helpers import serialize_row


class InMemoryProductRepository(ProductRepository):
    """Store double that behaves like the products table"""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.next_id = 1
        self.clock = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        self.fail_with: str = ""
        self.calls: List[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_with:
            raise StoreError(self.fail_with)

    async def list_products(self) -> List[Dict[str, Any]]:
        self._check("list")
        ordered = sorted(self.rows, key=lambda row: (row["created_at"], row["id"]), reverse=True)
        return [serialize_row(row) for row in ordered]

    async def create_product(self, product: ProductCreate) -> Dict[str, Any]:
        self._check("create")
        row = {
            "id": self.next_id,
            "nome": product.nome,
            "preco": product.preco,
            "descricao": product.descricao,
            "created_at": self.clock,
        }
        self.next_id += 1
        self.clock += timedelta(minutes=1)
        self.rows.append(row)
        return serialize_row(row)

    async def delete_product(self, product_id: int) -> List[Dict[str, Any]]:
        self._check("delete")
        deleted = [row for row in self.rows if row["id"] == product_id]
        self.rows = [row for row in self.rows if row["id"] != product_id]
        return [serialize_row(row) for row in deleted]


@pytest.fixture
def repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def products_service(repository) -> ProductsService:
    return ProductsService(repository)


@pytest_asyncio.fixture
async def api_client(products_service):
    """HTTP client bound to the ASGI app with the in-memory store"""
    app.dependency_overrides[get_products_service] = lambda: products_service
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()
