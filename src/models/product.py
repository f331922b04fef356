"""
Product-related Pydantic models
"""

from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, Field


class ProductCreateRequest(BaseModel):
    """Raw create payload. Field checks happen in ProductsService so that
    missing or malformed values produce the API's own validation messages."""
    nome: Optional[Any] = None
    preco: Optional[Any] = None
    descricao: Optional[Any] = None


class ProductCreate(BaseModel):
    """Validated values ready to be inserted"""
    nome: str = Field(min_length=1)
    preco: Decimal = Field(gt=0)
    descricao: Optional[str] = None
