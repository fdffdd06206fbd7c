"""Shared test fixtures for supamarker."""

import json
import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import ResolvedConfig


SAMPLE_POST = """---
title: Hello World
summary: First post on the new blog
tags: [intro, meta]
---
# Hello

Welcome to the blog.
"""


@pytest.fixture(autouse=True)
def _reset_cli_logger():
    """Drop handlers the CLI attaches so they never outlive a captured stdout."""
    yield
    logger = logging.getLogger("src")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config() -> ResolvedConfig:
    """A resolved config pointing at a fake Supabase project."""
    return ResolvedConfig(
        supabase_url="https://test.supabase.co",
        service_key="test-key",
        bucket="blog",
        table="posts",
    )


@pytest.fixture
def make_response():
    """Factory for real ``requests.Response`` objects with canned content."""

    def _make(status: int = 200, json_body=None, text: str = "") -> requests.Response:
        resp = requests.Response()
        resp.status_code = status
        if json_body is not None:
            resp._content = json.dumps(json_body).encode("utf-8")
        else:
            resp._content = text.encode("utf-8")
        resp.encoding = "utf-8"
        return resp

    return _make


@pytest.fixture
def session() -> MagicMock:
    """A stand-in for ``requests.Session``; no network access."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def post_file(tmp_path) -> Path:
    """A markdown post with frontmatter on disk."""
    path = tmp_path / "hello-world.md"
    path.write_text(SAMPLE_POST, encoding="utf-8")
    return path
