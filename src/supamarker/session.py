"""Shared HTTP session for the Supabase storage and REST endpoints."""

from __future__ import annotations

import logging
from typing import TypeVar

import requests
from pydantic import BaseModel

from src.common.config import ResolvedConfig

from .errors import BackendError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def create_session(config: ResolvedConfig) -> requests.Session:
    """Build a session carrying the service-key auth headers.

    Every Supabase request needs both the bearer token and the ``apikey``
    header to be accepted with service-role rights.
    """
    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Bearer {config.service_key}",
            "apikey": config.service_key,
            "Accept": "application/json",
        }
    )
    return session


def check_response(resp: requests.Response, error_cls: type[BackendError]) -> None:
    """Raise ``error_cls`` carrying status and body on a non-2xx response."""
    if resp.ok:
        return
    body = resp.text or ""
    logger.debug(
        "%s %s -> %s: %s",
        resp.request.method if resp.request is not None else "?",
        resp.url, resp.status_code, body,
    )
    raise error_cls(resp.status_code, body)


def parse_items(
    resp: requests.Response,
    model: type[ModelT],
    error_cls: type[BackendError],
) -> list[ModelT]:
    """Validate a JSON array response into ``model`` instances.

    A body that is not a list of matching objects raises ``error_cls``.
    """
    try:
        return [model.model_validate(item) for item in resp.json()]
    except (ValueError, TypeError) as e:
        raise error_cls(resp.status_code, f"unexpected response body: {resp.text}") from e
