"""
Console front end for the product board

Usage:
    padaria-client list
    padaria-client add --nome "Pão francês" --preco 0.75 --descricao "Crocante"
    padaria-client delete 7
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional, TextIO

from client.api_client import DEFAULT_API_BASE_URL, ProductsApiClient
from client.board import (
    BoardView, ConnectionStatus, ListDisplay, Notification, NotificationKind,
    ProductBoard, ProductCard, install_error_hooks,
)

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    ConnectionStatus.LOADING: "⏳",
    ConnectionStatus.ONLINE: "✅",
    ConnectionStatus.OFFLINE: "❌",
}

NOTIFICATION_ICONS = {
    NotificationKind.SUCCESS: "✅",
    NotificationKind.ERROR: "❌",
    NotificationKind.INFO: "ℹ️",
}


class ConsoleView(BoardView):
    """Prints the board to a text stream"""

    def __init__(self, out: TextIO = sys.stdout):
        self.out = out

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def show_connection_status(self, status: ConnectionStatus, message: str) -> None:
        self._print(f"{STATUS_ICONS[status]} {message}")

    def hide_connection_status(self) -> None:
        pass

    def show_list_state(self, display: ListDisplay) -> None:
        if display == ListDisplay.LOADING:
            self._print("🔍 Buscando produtos...")
        elif display == ListDisplay.EMPTY:
            self._print("📭 Nenhum produto cadastrado ainda.")

    def render_cards(self, cards: List[ProductCard], total: int) -> None:
        self._print(f"🥖 {total} produto(s)")
        for card in cards:
            self._print("-" * 40)
            self._print(f"#{card.product_id}  {card.nome}  {card.price_label}")
            if card.descricao:
                self._print(f"    {card.descricao}")
            self._print(f"    📅 Cadastrado em {card.created_label}")
        self._print("-" * 40)

    def notify(self, notification: Notification) -> None:
        self._print(f"{NOTIFICATION_ICONS[notification.kind]} {notification.message}")

    def set_submitting(self, busy: bool) -> None:
        if busy:
            self._print("⏳ Cadastrando...")

    def reset_form(self) -> None:
        pass

    def show_confirmation(self, nome: str) -> None:
        self._print(f"🗑️ Excluir o produto \"{nome}\"?")

    def hide_confirmation(self) -> None:
        pass

    def ask_confirmation(self) -> bool:
        """Yes/no prompt; an empty answer, EOF or Ctrl+C cancel"""
        try:
            answer = input("Confirmar exclusão? [s/N] ")
        except (EOFError, KeyboardInterrupt):
            self._print()
            return False
        return answer.strip().lower() in ("s", "sim", "y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="padaria-client", description="Padaria product catalogue client")
    parser.add_argument(
        "--api-url",
        default=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL),
        help="API base URL (default: $API_BASE_URL or %(default)s)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Test the connection to the API")
    subparsers.add_parser("list", help="List products")

    add = subparsers.add_parser("add", help="Create a product")
    add.add_argument("--nome", required=True)
    add.add_argument("--preco", required=True)
    add.add_argument("--descricao")

    delete = subparsers.add_parser("delete", help="Delete a product")
    delete.add_argument("product_id", type=int)
    delete.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    return parser


async def run(args: argparse.Namespace, view: ConsoleView, api: ProductsApiClient) -> int:
    install_error_hooks(asyncio.get_running_loop(), view)
    board = ProductBoard(api, view)

    if args.command == "status":
        return 0 if await board.probe_connection() else 1

    if args.command == "list":
        await board.start()
        return 0

    if args.command == "add":
        return 0 if await board.submit(args.nome, args.preco, args.descricao) else 1

    # delete: the prompt names the product, so load the list first
    if not await board.refresh():
        return 1
    target = next((r for r in board.state.records if r["id"] == args.product_id), None)
    if target is None:
        view.notify(Notification(f"Produto {args.product_id} não encontrado", NotificationKind.ERROR))
        return 1

    board.request_deletion(target["id"], target["nome"])
    if args.yes or view.ask_confirmation():
        return 0 if await board.confirm_deletion() else 1

    board.cancel_deletion()
    view.notify(Notification("Exclusão cancelada", NotificationKind.INFO))
    return 0


async def _run_with_client(args: argparse.Namespace, view: ConsoleView) -> int:
    async with ProductsApiClient(args.api_url) as api:
        return await run(args, view, api)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())
    args = build_parser().parse_args(argv)
    view = ConsoleView()

    try:
        return asyncio.run(_run_with_client(args, view))
    except Exception as e:
        logger.exception(f"Unhandled error: {e}")
        view.notify(Notification("Ocorreu um erro inesperado. Verifique os logs.", NotificationKind.ERROR))
        return 1


if __name__ == "__main__":
    sys.exit(main())
