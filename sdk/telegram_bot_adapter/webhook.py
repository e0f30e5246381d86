"""Webhook endpoint feeding Telegram updates into a bot."""

from __future__ import annotations

import logging
import secrets

import httpx
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .bot import TelegramBot
from .config import get_settings
from .models import Update

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def create_webhook_router(
    bot: TelegramBot,
    *,
    path: str = "/telegram/webhook",
    secret_token: str | None = None,
) -> APIRouter:
    """
    Build a router with one POST endpoint that dispatches updates to `bot`.

    Without an explicit `secret_token` the TELEGRAM_WEBHOOK_SECRET setting is
    used; an empty secret disables the header check.
    """
    if secret_token is None:
        secret_token = get_settings().telegram_webhook_secret
    router = APIRouter(tags=["webhook"])

    @router.post(path)
    async def telegram_webhook(request: Request) -> JSONResponse:
        """Receive one Telegram update."""
        if secret_token:
            received = request.headers.get(SECRET_HEADER, "")
            if not secrets.compare_digest(received, secret_token):
                raise HTTPException(status_code=401, detail="invalid secret token")

        try:
            update = Update.model_validate(await request.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Rejected webhook payload: %s", exc)
            raise HTTPException(status_code=400, detail="invalid update payload")

        try:
            await bot.handle_update(update)
        except httpx.HTTPError as exc:
            raise HTTPException(status_code=502, detail=str(exc))
        return JSONResponse(content={"ok": True})

    return router
