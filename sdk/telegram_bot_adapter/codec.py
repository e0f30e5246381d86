"""
Query encoding and request assembly for Bot API calls.

Every call is a GET to `{base}/{method}` where each non-None parameter becomes
one query entry: scalars as their literal text, objects and arrays as JSON.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from .exceptions import TelegramRequestError

ParameterBag = Mapping[str, Any]


def _as_bag(params: ParameterBag | BaseModel | None) -> dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        return params.model_dump(mode="json", by_alias=True, exclude_none=True)
    return dict(params)


def encode_value(value: Any) -> str:
    """Render a single parameter value as query text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list, tuple, BaseModel)):
        return json.dumps(
            to_jsonable_python(value, by_alias=True, exclude_none=True),
            ensure_ascii=False,
            separators=(",", ":"),
        )
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_params(params: ParameterBag | BaseModel | None) -> list[tuple[str, str]]:
    """Encode a parameter bag into query pairs, dropping None values."""
    return [(key, encode_value(value)) for key, value in _as_bag(params).items() if value is not None]


def build_url(base: str, slug: str) -> str:
    """Join base and method slug with exactly one slash."""
    if not base or not httpx.URL(base).is_absolute_url:
        raise TelegramRequestError(f"bot API base must be an absolute URL, got {base!r}", method=slug)
    method = slug.strip("/") if slug else ""
    if not method:
        raise TelegramRequestError("method slug must not be empty")
    return f"{base.rstrip('/')}/{method}"


def build_request(base: str, slug: str, params: ParameterBag | BaseModel | None = None) -> httpx.Request:
    """Assemble the GET request for one Bot API call."""
    return httpx.Request("GET", build_url(base, slug), params=encode_params(params))
