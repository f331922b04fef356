"""
Console client tests - argument parsing and command flows
"""

import io
from unittest.mock import AsyncMock

import pytest

from client.api_client import ApiError, ProductsApiClient
from client.console import ConsoleView, build_parser, run

RECORDS = [
    {"id": 7, "nome": "Bolo", "preco": 25.0, "descricao": "Chocolate", "created_at": "2024-01-15T10:31:00+00:00"},
]


@pytest.fixture
def api():
    mock = AsyncMock(spec=ProductsApiClient)
    mock.list_products.return_value = list(RECORDS)
    return mock


@pytest.fixture
def out():
    return io.StringIO()


def _args(*argv):
    return build_parser().parse_args(list(argv))


class TestConsoleCommands:

    @pytest.mark.asyncio
    async def test_list_prints_cards(self, api, out):
        code = await run(_args("list"), ConsoleView(out), api)

        assert code == 0
        text = out.getvalue()
        assert "Bolo" in text
        assert "R$ 25,00" in text

    @pytest.mark.asyncio
    async def test_add_invalid_price(self, api, out):
        code = await run(_args("add", "--nome", "Pão", "--preco", "abc"), ConsoleView(out), api)

        assert code == 1
        assert "Preço deve ser maior que zero" in out.getvalue()
        api.create_product.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_with_yes_skips_prompt(self, api, out):
        code = await run(_args("delete", "7", "--yes"), ConsoleView(out), api)

        assert code == 0
        api.delete_product.assert_awaited_once_with(7)
        assert "Produto excluído com sucesso!" in out.getvalue()

    @pytest.mark.asyncio
    async def test_delete_cancelled_at_prompt(self, api, out, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: "")

        code = await run(_args("delete", "7"), ConsoleView(out), api)

        assert code == 0
        api.delete_product.assert_not_called()
        assert "Exclusão cancelada" in out.getvalue()

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, api, out):
        code = await run(_args("delete", "99", "--yes"), ConsoleView(out), api)

        assert code == 1
        api.delete_product.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_stops_when_list_fails(self, api, out):
        api.list_products.side_effect = ApiError("Falha de conexão com a API")

        code = await run(_args("delete", "7", "--yes"), ConsoleView(out), api)

        assert code == 1
        assert "Erro ao carregar produtos" in out.getvalue()
        assert "não encontrado" not in out.getvalue()
        api.delete_product.assert_not_called()

    @pytest.mark.asyncio
    async def test_status_offline(self, api, out):
        api.health_check.side_effect = ApiError("Falha de conexão com a API")

        code = await run(_args("status"), ConsoleView(out), api)

        assert code == 1
        assert "Erro de conexão" in out.getvalue()


def test_ask_confirmation_eof_cancels(out, monkeypatch):
    def raise_eof(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)

    assert ConsoleView(out).ask_confirmation() is False


def test_api_url_from_environment(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://padaria.example.com/api")

    assert build_parser().parse_args(["list"]).api_url == "http://padaria.example.com/api"
