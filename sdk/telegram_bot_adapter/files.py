"""Two-step file download: getFile for the storage path, then the file endpoint."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel

from .codec import build_request
from .config import DEFAULT_FILE_BASE
from .models import TelegramEnvelope

if TYPE_CHECKING:
    from .telegram_client import TelegramApi

logger = logging.getLogger(__name__)


def _error_response(status_code: int, text: str) -> httpx.Response:
    return httpx.Response(status_code, text=text)


class FileResolver:
    """Resolves a file_id to its storage path and fetches the content."""

    def __init__(self, api: TelegramApi, file_base: str = DEFAULT_FILE_BASE):
        self._api = api
        self.file_base = file_base.rstrip("/")

    def file_url(self, token: str, file_path: str) -> str:
        return f"{self.file_base}/bot{token}/{file_path.lstrip('/')}"

    async def fetch(self, bot_api: str, params: Mapping[str, Any] | BaseModel, token: str) -> httpx.Response:
        """
        Download a file by file_id.

        Returns the file response on success. Failures are returned as
        synthesized responses instead of being raised:
        400 for a missing file_id or a failed resolution, the upstream status
        for HTTP errors on getFile, 500 for anything unexpected.
        """
        bag = params.model_dump(exclude_none=True) if isinstance(params, BaseModel) else dict(params)
        if not bag.get("file_id"):
            return _error_response(400, "No file_id provided")

        try:
            response = await self._api.perform(build_request(bot_api, "getFile", bag), method="getFile")
            if not response.is_success:
                return _error_response(
                    response.status_code,
                    f"API error: {response.status_code} {response.reason_phrase}",
                )

            envelope = TelegramEnvelope.model_validate(response.json())
            result = envelope.result if isinstance(envelope.result, dict) else {}
            file_path = result.get("file_path")
            if not envelope.ok or not file_path:
                return _error_response(400, envelope.description or "Failed to get file path")

            download = httpx.Request("GET", self.file_url(token, file_path))
            return await self._api.perform(download, method="file")
        except Exception as exc:
            logger.exception("Error in getFile: %s", exc)
            return _error_response(500, f"Error retrieving file: {exc}")
