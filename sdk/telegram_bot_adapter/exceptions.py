"""Exceptions raised by the adapter."""

from __future__ import annotations


class TelegramError(Exception):
    """Base error for the Telegram adapter."""


class TelegramRequestError(TelegramError, ValueError):
    """A request could not be built from the given endpoint and parameters."""

    def __init__(self, message: str, method: str | None = None):
        super().__init__(message)
        self.method = method


class TelegramConfigError(TelegramError):
    """Bot configuration is missing or invalid."""
