"""
Product board controller - the client application's logic, independent of presentation.

State lives in an immutable BoardState that the controller replaces on every
update. Presentation is reached only through the BoardView bindings given to
the constructor.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple

from client.api_client import ApiError, ProductsApiClient
from client.formatting import format_currency, format_timestamp

logger = logging.getLogger(__name__)

ONLINE_BANNER_SECONDS = 3.0


class ConnectionStatus(str, Enum):
    LOADING = "loading"
    ONLINE = "online"
    OFFLINE = "offline"


class ListDisplay(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


class NotificationKind(str, Enum):
    SUCCESS = "sucesso"
    ERROR = "erro"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    kind: NotificationKind = NotificationKind.INFO
    duration: float = 5.0


@dataclass(frozen=True)
class PendingDelete:
    product_id: int
    nome: str


@dataclass(frozen=True)
class ProductCard:
    product_id: int
    nome: str
    price_label: str
    descricao: Optional[str]
    created_label: str


@dataclass(frozen=True)
class BoardState:
    records: Tuple[Dict[str, Any], ...] = ()
    pending_delete: Optional[PendingDelete] = None


class BoardView(Protocol):
    """Presentation bindings the board drives"""

    def show_connection_status(self, status: ConnectionStatus, message: str) -> None: ...

    def hide_connection_status(self) -> None: ...

    def show_list_state(self, display: ListDisplay) -> None: ...

    def render_cards(self, cards: List[ProductCard], total: int) -> None: ...

    def notify(self, notification: Notification) -> None: ...

    def set_submitting(self, busy: bool) -> None: ...

    def reset_form(self) -> None: ...

    def show_confirmation(self, nome: str) -> None: ...

    def hide_confirmation(self) -> None: ...


def build_cards(records: Tuple[Dict[str, Any], ...]) -> List[ProductCard]:
    """Map records to display cards"""
    return [
        ProductCard(
            product_id=record["id"],
            nome=record["nome"],
            price_label=format_currency(record["preco"]),
            descricao=record.get("descricao") or None,
            created_label=format_timestamp(record["created_at"]),
        )
        for record in records
    ]


def parse_form_price(raw: Any) -> Optional[float]:
    """Read the price field the way the form does; None when it is not a number"""
    if isinstance(raw, bool):
        return None
    try:
        price = float(str(raw).strip().replace(",", "."))
    except ValueError:
        return None
    if price != price or price in (float("inf"), float("-inf")):
        return None
    return price


class ProductBoard:
    """Lists, creates and deletes products through the API and keeps the view in sync"""

    def __init__(self, api: ProductsApiClient, view: BoardView, online_banner_seconds: float = ONLINE_BANNER_SECONDS):
        self.api = api
        self.view = view
        self.online_banner_seconds = online_banner_seconds
        self.state = BoardState()

    def _update(self, **changes) -> BoardState:
        self.state = replace(self.state, **changes)
        return self.state

    def _error(self, message: str) -> None:
        self.view.notify(Notification(message, NotificationKind.ERROR))

    async def start(self) -> None:
        """Page load: probe the API and load the list"""
        await self.probe_connection()
        await self.refresh()

    async def probe_connection(self) -> bool:
        """Check the health endpoint and drive the connection banner"""
        self.view.show_connection_status(ConnectionStatus.LOADING, "Verificando conexão com a API...")
        try:
            await self.api.health_check()
        except ApiError as e:
            logger.error(f"Connection test failed: {e}")
            self.view.show_connection_status(
                ConnectionStatus.OFFLINE, "Erro de conexão. Verifique se o backend está rodando."
            )
            self._error("Erro de conexão com a API. Verifique se o backend está rodando.")
            return False

        self.view.show_connection_status(ConnectionStatus.ONLINE, "Conectado com sucesso à API!")
        asyncio.get_running_loop().call_later(self.online_banner_seconds, self.view.hide_connection_status)
        return True

    async def refresh(self) -> bool:
        """Re-fetch the whole list; on failure show the empty state and keep the last records.
        Returns False when the list could not be loaded."""
        self.view.show_list_state(ListDisplay.LOADING)
        try:
            records = await self.api.list_products()
        except ApiError as e:
            logger.error(f"Failed to load products: {e}")
            self._error(f"Erro ao carregar produtos: {e.message}")
            self.view.show_list_state(ListDisplay.EMPTY)
            return False

        logger.info(f"{len(records)} products loaded")
        self._update(records=tuple(records))
        self.render()
        return True

    def render(self) -> None:
        records = self.state.records
        if not records:
            self.view.show_list_state(ListDisplay.EMPTY)
            return
        self.view.show_list_state(ListDisplay.POPULATED)
        self.view.render_cards(build_cards(records), len(records))

    async def submit(self, nome: str, preco: Any, descricao: Optional[str] = None) -> bool:
        """Validate the creation form, then create and refresh. Returns True on success."""
        nome = (nome or "").strip()
        price = parse_form_price(preco)
        descricao = (descricao or "").strip() or None

        if not nome:
            self._error("Nome do produto é obrigatório")
            return False
        if price is None or price <= 0:
            self._error("Preço deve ser maior que zero")
            return False

        self.view.set_submitting(True)
        try:
            try:
                created = await self.api.create_product(nome, price, descricao)
            except ApiError as e:
                logger.error(f"Failed to create product: {e}")
                self._error(f"Erro ao cadastrar produto: {e.message}")
                return False

            logger.info(f"Product created: {created}")
            self.view.notify(Notification("Produto cadastrado com sucesso!", NotificationKind.SUCCESS))
            self.view.reset_form()
            await self.refresh()
            return True
        finally:
            self.view.set_submitting(False)

    def request_deletion(self, product_id: int, nome: str) -> None:
        """Hold the target and ask the user to confirm"""
        self._update(pending_delete=PendingDelete(product_id, nome))
        self.view.show_confirmation(nome)

    def cancel_deletion(self) -> None:
        """Discard the pending delete without touching the API"""
        self._update(pending_delete=None)
        self.view.hide_confirmation()

    async def confirm_deletion(self) -> bool:
        """Delete the pending product, then refresh. Returns True on success."""
        pending = self.state.pending_delete
        if pending is None:
            return False
        self.cancel_deletion()

        try:
            await self.api.delete_product(pending.product_id)
        except ApiError as e:
            logger.error(f"Failed to delete product {pending.product_id}: {e}")
            self._error(f"Erro ao excluir produto: {e.message}")
            return False

        self.view.notify(Notification("Produto excluído com sucesso!", NotificationKind.SUCCESS))
        await self.refresh()
        return True


def install_error_hooks(loop: asyncio.AbstractEventLoop, view: BoardView) -> None:
    """Surface errors nobody handled (failed callbacks, forgotten tasks) as a generic notification"""

    def handle(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        logger.error(f"Unhandled error: {context.get('message')}", exc_info=context.get("exception"))
        view.notify(Notification("Ocorreu um erro inesperado. Verifique os logs.", NotificationKind.ERROR))

    loop.set_exception_handler(handle)
