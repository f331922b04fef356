"""
HTTP client for the Padaria Products API
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:3000/api"


class ApiError(Exception):
    """A request failed: network error, non-JSON answer or an error envelope"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProductsApiClient:
    """Thin async client; every method returns the envelope's payload or raises ApiError"""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ProductsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        fallback_message: str = "Erro na requisição"
    ) -> Dict[str, Any]:
        """Send a request and return the parsed success envelope"""
        try:
            response = await self._client.request(method, endpoint, json=data)
        except httpx.HTTPError as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise ApiError(f"Falha de conexão com a API: {e}") from e

        try:
            body = response.json()
        except ValueError:
            raise ApiError(fallback_message, response.status_code)

        if response.is_error or not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(message or fallback_message, response.status_code)

        return body

    async def health_check(self) -> Dict[str, Any]:
        return await self.request("GET", "/test", fallback_message="API retornou erro")

    async def list_products(self) -> List[Dict[str, Any]]:
        body = await self.request("GET", "/produtos", fallback_message="Erro ao buscar produtos")
        return body.get("data") or []

    async def create_product(self, nome: str, preco: float, descricao: Optional[str] = None) -> Dict[str, Any]:
        body = await self.request(
            "POST",
            "/produtos",
            data={"nome": nome, "preco": preco, "descricao": descricao},
            fallback_message="Erro ao cadastrar produto"
        )
        return body.get("data") or {}

    async def delete_product(self, product_id: int) -> Dict[str, Any]:
        body = await self.request("DELETE", f"/produtos/{product_id}", fallback_message="Erro ao excluir produto")
        return body.get("data") or {}
