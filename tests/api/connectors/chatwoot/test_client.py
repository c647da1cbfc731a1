"""Testes do ChatwootInboxClient com httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from api.connectors.chatwoot.client import ChatwootInboxClient
from api.connectors.chatwoot.errors import build_api_error, extract_error_message
from api.connectors.chatwoot.http_base import HttpClient, HttpClientConfig
from config.settings import ChatwootSettings
from utils.errors import InboxConflictError, InboxServiceError

Handler = Callable[[httpx.Request], httpx.Response]


def _settings(**overrides: object) -> ChatwootSettings:
    values: dict[str, object] = {
        "base_url": "https://chatwoot.test/",
        "access_token": "secret-token",
        "inbox_id": "7",
        "account_id": "3",
    }
    values.update(overrides)
    return ChatwootSettings(**values)  # type: ignore[arg-type]


def _client(handler: Handler, **overrides: object) -> ChatwootInboxClient:
    http = HttpClient(
        HttpClientConfig(
            max_retries=0,
            backoff_base_seconds=0.0,
            transport=httpx.MockTransport(handler),
        )
    )
    return ChatwootInboxClient(_settings(**overrides), http_client=http)


class _Recorder:
    """Handler que grava requests e devolve resposta fixa."""

    def __init__(self, status_code: int = 200, body: object = None) -> None:
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> dict[str, object]:
        return json.loads(self.last.content)


class TestRequests:
    @pytest.mark.asyncio
    async def test_every_call_sends_access_token_header(self) -> None:
        recorder = _Recorder(body={"payload": []})
        client = _client(recorder)

        await client.search_contacts("+5215512345678")

        assert recorder.last.headers["api_access_token"] == "secret-token"
        assert recorder.last.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_create_contact(self) -> None:
        recorder = _Recorder(
            body={
                "payload": {
                    "contact": {
                        "id": 42,
                        "name": "Ana",
                        "phone_number": "+5215512345678",
                        "contact_inboxes": [],
                    },
                    "contact_inbox": {"source_id": "src-1", "inbox": {"id": 7}},
                }
            }
        )
        client = _client(recorder)

        created = await client.create_contact(7, "Ana", "+5215512345678")

        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/api/v1/accounts/3/contacts"
        assert recorder.last_json == {
            "inbox_id": 7,
            "name": "Ana",
            "phone_number": "+5215512345678",
            "identifier": "+5215512345678",
        }
        assert created.contact.contact_id == 42
        assert created.contact_inbox is not None
        assert created.contact_inbox.source_id == "src-1"
        assert created.contact_inbox.inbox_id == 7

    @pytest.mark.asyncio
    async def test_search_contacts_maps_inbox_bindings(self) -> None:
        recorder = _Recorder(
            body={
                "payload": [
                    {
                        "id": 9,
                        "name": None,
                        "phone_number": "+5215512345678",
                        "contact_inboxes": [
                            {"source_id": "other", "inbox": {"id": 1}},
                            {"source_id": "mine", "inbox": {"id": 7}},
                        ],
                    }
                ],
                "meta": {"count": 1},
            }
        )
        client = _client(recorder)

        contacts = await client.search_contacts("+5215512345678")

        assert recorder.last.url.path == "/api/v1/accounts/3/contacts/search"
        assert recorder.last.url.params["q"] == "+5215512345678"
        assert len(contacts) == 1
        assert contacts[0].name == ""
        binding = contacts[0].binding_for(7)
        assert binding is not None
        assert binding.source_id == "mine"

    @pytest.mark.asyncio
    async def test_create_conversation(self) -> None:
        recorder = _Recorder(body={"id": 77, "status": "open", "contact_id": 9})
        client = _client(recorder)

        conversation = await client.create_conversation(7, 9, "src-9")

        assert recorder.last.url.path == "/api/v1/accounts/3/conversations"
        assert recorder.last_json == {"source_id": "src-9", "inbox_id": 7, "contact_id": 9}
        assert conversation.conversation_id == 77
        assert conversation.is_open

    @pytest.mark.asyncio
    async def test_list_open_conversations_reads_sender_phone(self) -> None:
        recorder = _Recorder(
            body={
                "data": {
                    "meta": {"all_count": 3},
                    "payload": [
                        {
                            "id": 1,
                            "status": "open",
                            "meta": {"sender": {"id": 5, "phone_number": "+521551"}},
                        },
                        {"id": 2, "status": "open", "contact": {"phone_number": "+521552"}},
                        {"id": 3, "status": "open", "meta": {}},
                    ],
                }
            }
        )
        client = _client(recorder)

        conversations = await client.list_open_conversations(7)

        assert recorder.last.url.params["status"] == "open"
        assert recorder.last.url.params["inbox_id"] == "7"
        assert [c.contact_phone for c in conversations] == ["+521551", "+521552", None]
        assert conversations[0].contact_id == 5

    @pytest.mark.asyncio
    async def test_post_message(self) -> None:
        recorder = _Recorder(
            body={"id": 300, "conversation_id": 77, "content": "Hola", "message_type": 1}
        )
        client = _client(recorder)

        message = await client.post_message(77, "Hola", "outgoing")

        assert recorder.last.url.path == "/api/v1/accounts/3/conversations/77/messages"
        assert recorder.last_json == {
            "content": "Hola",
            "message_type": "outgoing",
            "private": False,
        }
        assert message.message_id == 300
        assert message.direction == "outgoing"


class TestErrors:
    @pytest.mark.asyncio
    async def test_422_on_contact_create_is_conflict(self) -> None:
        client = _client(
            _Recorder(422, {"message": "Phone number has already been taken"})
        )

        with pytest.raises(InboxConflictError) as exc_info:
            await client.create_contact(7, "Ana", "+5215512345678")

        assert exc_info.value.status_code == 422
        assert "already been taken" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_http_error_carries_status_and_body(self) -> None:
        client = _client(_Recorder(404, {"error": "Resource could not be found"}))

        with pytest.raises(InboxServiceError) as exc_info:
            await client.create_conversation(7, 9, "src")

        assert not isinstance(exc_info.value, InboxConflictError)
        assert exc_info.value.status_code == 404
        assert exc_info.value.body == {"error": "Resource could not be found"}

    @pytest.mark.asyncio
    async def test_server_error_after_retries(self) -> None:
        client = _client(_Recorder(503, {}))

        with pytest.raises(InboxServiceError) as exc_info:
            await client.list_open_conversations(7)

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_unexpected_payload(self) -> None:
        client = _client(_Recorder(200, {"payload": {"unexpected": True}}))

        with pytest.raises(InboxServiceError, match="chatwoot_unexpected_payload:create_contact"):
            await client.create_contact(7, "Ana", "+5215512345678")

    @pytest.mark.asyncio
    async def test_not_configured_makes_no_request(self) -> None:
        recorder = _Recorder()
        client = _client(recorder, base_url="", access_token="")

        with pytest.raises(InboxServiceError, match="chatwoot_not_configured"):
            await client.search_contacts("+5215512345678")

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_missing_account_id(self) -> None:
        recorder = _Recorder()
        client = _client(recorder, account_id="")

        with pytest.raises(InboxServiceError, match="chatwoot_account_id_missing"):
            await client.search_contacts("+5215512345678")

        assert recorder.requests == []

    def test_extract_error_message_formats(self) -> None:
        assert extract_error_message({"message": "a"}) == "a"
        assert extract_error_message({"error": "b"}) == "b"
        assert extract_error_message({"errors": ["x", "y"]}) == "x; y"
        assert extract_error_message("plain text") == "plain text"
        assert extract_error_message(None) == "Erro desconhecido"

    def test_build_api_error_classifies_conflict(self) -> None:
        assert isinstance(build_api_error(422, {}), InboxConflictError)
        error = build_api_error(500, "boom")
        assert type(error) is InboxServiceError
        assert str(error) == "chatwoot_http_500: boom"


class TestProfile:
    _PROFILE = {"id": 11, "name": "Agente", "accounts": [{"id": 3}, {"id": 4}]}

    @pytest.mark.asyncio
    async def test_get_profile(self) -> None:
        recorder = _Recorder(body=self._PROFILE)
        client = _client(recorder)

        profile = await client.get_profile()

        assert recorder.last.url.path == "/api/v1/profile"
        assert profile.user_id == 11
        assert profile.account_ids == (3, 4)
        assert client.account_id == "3"

    @pytest.mark.asyncio
    async def test_empty_account_id_is_adopted_from_profile(self) -> None:
        client = _client(_Recorder(body=self._PROFILE), account_id="")

        await client.get_profile()

        assert client.account_id == "3"

    @pytest.mark.asyncio
    async def test_foreign_account_id_is_replaced(self) -> None:
        client = _client(_Recorder(body=self._PROFILE), account_id="99")

        await client.get_profile()

        assert client.account_id == "3"

    @pytest.mark.asyncio
    async def test_unauthorized(self) -> None:
        client = _client(_Recorder(401, {"error": "Invalid Access Token"}))

        with pytest.raises(InboxServiceError) as exc_info:
            await client.get_profile()

        assert exc_info.value.status_code == 401
