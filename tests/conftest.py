from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest


ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "sdk"))

from telegram_bot_adapter import TelegramBot  # noqa: E402
from telegram_bot_adapter.telegram_client import TelegramApi  # noqa: E402


TOKEN = "123456:TEST-TOKEN"
API_BASE = "https://api.telegram.org"
FILE_BASE = "https://api.telegram.org/file"


class TransportRecorder:
    """Fake Bot API: records outbound requests and answers per method slug."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def respond(
        self,
        method: str,
        *,
        status_code: int = 200,
        json: Any = None,
        content: bytes | None = None,
    ) -> None:
        def _reply(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json if json is not None else {"ok": True, "result": True})

        self._routes[method] = _reply

    def fail(self, method: str, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self._routes[method] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(self.key(request))
        if route is None:
            return httpx.Response(200, json={"ok": True, "result": True})
        return route(request)

    @staticmethod
    def key(request: httpx.Request) -> str:
        if request.url.path.startswith("/file/"):
            return "file"
        return request.url.path.rsplit("/", 1)[-1]

    @property
    def methods(self) -> list[str]:
        return [self.key(request) for request in self.requests]

    def params(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].url.params)


@pytest.fixture
def transport() -> TransportRecorder:
    return TransportRecorder()


@pytest.fixture
def api(transport: TransportRecorder) -> TelegramApi:
    client = httpx.AsyncClient(transport=httpx.MockTransport(transport.handler))
    return TelegramApi(client, file_base=FILE_BASE)


@pytest.fixture
def bot(api: TelegramApi) -> TelegramBot:
    return TelegramBot(TOKEN, api_base=API_BASE, client=api)


# --- Update builders ---


def make_message(
    *,
    chat_id: int = 42,
    message_id: int = 7,
    **fields: Any,
) -> dict[str, Any]:
    message: dict[str, Any] = {
        "message_id": message_id,
        "date": 1700000000,
        "chat": {"id": chat_id, "type": "private"},
        "from": {"id": 1001, "is_bot": False, "first_name": "Ann"},
    }
    message.update(fields)
    return message


def photo_sizes(file_id: str = "photo-file") -> list[dict[str, Any]]:
    return [{"file_id": file_id, "file_unique_id": "u1", "width": 90, "height": 90}]


def message_update(text: str = "hello", **fields: Any) -> dict[str, Any]:
    return {"update_id": 1, "message": make_message(text=text, **fields)}


def photo_update(**fields: Any) -> dict[str, Any]:
    return {"update_id": 2, "message": make_message(photo=photo_sizes(), **fields)}


def document_update() -> dict[str, Any]:
    return {
        "update_id": 3,
        "message": make_message(document={"file_id": "doc-file", "file_unique_id": "d1", "file_name": "a.pdf"}),
    }


def inline_update(query: str = "cats") -> dict[str, Any]:
    return {
        "update_id": 4,
        "inline_query": {"id": "iq-1", "from": {"id": 1001, "first_name": "Ann"}, "query": query, "offset": ""},
    }


def callback_update(with_message: bool = True) -> dict[str, Any]:
    callback: dict[str, Any] = {
        "id": "cb-1",
        "from": {"id": 1001, "first_name": "Ann"},
        "chat_instance": "ci",
        "data": "press",
    }
    if with_message:
        callback["message"] = make_message(chat_id=-100500, message_id=99, text="menu")
    return {"update_id": 5, "callback_query": callback}


def business_update() -> dict[str, Any]:
    return {
        "update_id": 6,
        "business_message": make_message(chat_id=77, message_id=11, text="hi", business_connection_id="bc-9"),
    }


def poll_update() -> dict[str, Any]:
    return {
        "update_id": 7,
        "poll": {
            "id": "poll-1",
            "question": "Tea or coffee?",
            "options": [{"text": "Tea", "voter_count": 1}, {"text": "Coffee", "voter_count": 2}],
            "total_voter_count": 3,
            "is_closed": False,
            "is_anonymous": True,
            "type": "regular",
            "allows_multiple_answers": False,
        },
    }


def poll_answer_update() -> dict[str, Any]:
    return {
        "update_id": 8,
        "poll_answer": {"poll_id": "poll-1", "user": {"id": 1001, "first_name": "Ann"}, "option_ids": [1]},
    }
