"""Teste E2E do golden path: relay → resolver → cliente Chatwoot (HTTP fake)."""

from __future__ import annotations

import httpx
import pytest

from api.connectors.chatwoot.client import ChatwootInboxClient
from api.connectors.chatwoot.http_base import HttpClient, HttpClientConfig
from app.bootstrap.inbox_factory import create_inbox_relay
from app.use_cases.inbox import InboxRelayUseCase
from config.settings import ChatwootSettings
from tests.fakes.fake_chatwoot_api import FakeChatwootApi


def _build_relay(api: FakeChatwootApi) -> InboxRelayUseCase:
    settings = ChatwootSettings(
        base_url="https://chatwoot.test/",
        access_token=api.access_token,
        inbox_id=str(api.inbox_id),
        account_id=str(api.account_id),
        max_retries=0,
    )
    client = ChatwootInboxClient(
        settings,
        http_client=HttpClient(HttpClientConfig(max_retries=0, transport=api.transport)),
    )
    return create_inbox_relay(settings=settings, inbox_service=client)


@pytest.mark.asyncio
async def test_inbound_from_new_number_creates_contact_and_conversation() -> None:
    api = FakeChatwootApi()
    relay = _build_relay(api)

    delivered = await relay.process_incoming_message("5511122233", "Hola", "Lead Teste")

    assert delivered is True
    assert api.calls_to("POST", "/contacts") == 1
    assert api.calls_to("POST", "/conversations") == 1
    contact = api.contacts[0]
    assert contact["phone_number"] == "+5215511122233"
    assert contact["name"] == "Lead Teste"
    conversation = api.conversations[0]
    assert len(api.messages) == 1
    message = api.messages[0]
    assert message["conversation_id"] == conversation["id"]
    assert message["content"] == "Hola"
    assert message["message_type"] == "incoming"
    assert message["private"] is False


@pytest.mark.asyncio
async def test_inbound_with_open_conversation_posts_directly() -> None:
    api = FakeChatwootApi()
    conversation = api.add_conversation("+5215511122233")
    relay = _build_relay(api)

    delivered = await relay.process_incoming_message("55 1112 2233", "Sigo aqui")

    assert delivered is True
    assert api.calls_to("POST", "/contacts") == 0
    assert api.calls_to("GET", "/contacts/search") == 0
    assert api.calls_to("POST", "/conversations") == 0
    assert api.messages[0]["conversation_id"] == conversation["id"]


@pytest.mark.asyncio
async def test_bot_reply_without_conversation_is_dropped() -> None:
    api = FakeChatwootApi()
    relay = _build_relay(api)

    delivered = await relay.process_bot_response("5511122233", "Respuesta")

    assert delivered is False
    assert api.messages == []
    assert api.calls_to("POST", "/contacts") == 0
    assert api.calls_to("POST", "/conversations") == 0


@pytest.mark.asyncio
async def test_full_dialog_reuses_cached_conversation() -> None:
    api = FakeChatwootApi()
    relay = _build_relay(api)

    await relay.start()
    try:
        assert await relay.process_incoming_message("5511122233", "Hola")
        requests_after_first = len(api.requests)

        assert await relay.process_bot_response("5511122233", "Bienvenido")
        assert await relay.process_incoming_message("+5215511122233", "Gracias")
    finally:
        await relay.stop()

    # Apenas os dois POST de mensagem após a primeira resolução
    assert len(api.requests) == requests_after_first + 2
    assert {m["conversation_id"] for m in api.messages} == {api.conversations[0]["id"]}
    assert [m["message_type"] for m in api.messages] == ["incoming", "outgoing", "incoming"]


@pytest.mark.asyncio
async def test_existing_contact_is_reused_without_creation() -> None:
    api = FakeChatwootApi()
    api.add_contact("+5215511122233", name="Antigo")
    relay = _build_relay(api)

    delivered = await relay.process_incoming_message("5511122233", "Hola")

    assert delivered is True
    assert api.calls_to("POST", "/contacts") == 0
    assert len(api.contacts) == 1
    assert api.conversations[0]["meta"]["sender"]["id"] == api.contacts[0]["id"]


@pytest.mark.asyncio
async def test_connection_check_with_invalid_token() -> None:
    api = FakeChatwootApi(access_token="expected")
    relay = _build_relay(api)
    api.access_token = "rotated"

    assert await relay.test_connection() is False


@pytest.mark.asyncio
async def test_connection_reset_on_incoming_post_returns_false() -> None:
    api = FakeChatwootApi()
    api.fail_on[("POST", "/messages")] = httpx.ReadError("connection reset")
    relay = _build_relay(api)

    assert await relay.process_incoming_message("5512345678", "hola") is False

    result = await relay.relay_incoming("5512345678", "hola")
    assert result.success is False
    assert result.error_code == "post_message"
    assert result.conversation_id == api.conversations[0]["id"]


@pytest.mark.asyncio
async def test_server_disconnect_on_bot_reply_returns_false() -> None:
    api = FakeChatwootApi()
    api.add_conversation("+5215512345678")
    api.fail_on[("POST", "/messages")] = httpx.RemoteProtocolError("server disconnected")
    relay = _build_relay(api)

    assert await relay.process_bot_response("5512345678", "Respuesta") is False
    assert api.messages == []


@pytest.mark.asyncio
async def test_transport_error_on_conversation_search_is_treated_as_absent() -> None:
    api = FakeChatwootApi()
    api.fail_on[("GET", "/conversations")] = httpx.ReadError("connection reset")
    relay = _build_relay(api)

    result = await relay.relay_bot_response("5512345678", "Respuesta")

    assert result.success is False
    assert result.error_code == "conversation_not_found"


@pytest.mark.asyncio
async def test_transport_error_on_contact_search_falls_back_to_creation() -> None:
    api = FakeChatwootApi()
    api.fail_on[("GET", "/contacts/search")] = httpx.ReadError("connection reset")
    relay = _build_relay(api)

    assert await relay.process_incoming_message("5512345678", "hola") is True
    assert api.calls_to("POST", "/contacts") == 1
    assert len(api.messages) == 1
