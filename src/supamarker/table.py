"""Posts table — metadata rows via the Supabase PostgREST endpoint."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from src.common.config import ResolvedConfig

from .errors import MetadataDeleteError, MetadataQueryError, MetadataUpsertError
from .models import PostRow, TableRow
from .session import check_response, create_session, parse_items
from .slugs import normalize_slug

logger = logging.getLogger(__name__)


class PostsTable:
    """Upsert, look up, delete and list rows keyed by ``slug``."""

    def __init__(
        self,
        config: ResolvedConfig,
        session: Optional[requests.Session] = None,
    ):
        self._table = config.table
        self._rest_url = f"{config.supabase_url}/rest/v1/{config.table}"
        self._timeout = config.timeout
        self._session = session or create_session(config)

    @property
    def name(self) -> str:
        return self._table

    def upsert(self, row: PostRow) -> None:
        """Insert ``row``, overwriting any existing row with the same slug.

        Raises:
            MetadataUpsertError: Non-success response.
        """
        resp = self._session.post(
            self._rest_url,
            json=[row.model_dump()],
            headers={"Prefer": "resolution=merge-duplicates"},
            timeout=self._timeout,
        )
        check_response(resp, MetadataUpsertError)
        logger.debug("Upserted %s row for %s", self._table, row.slug)

    def exists(self, slug: str) -> bool:
        """True if a row with this slug exists.

        Raises:
            MetadataQueryError: Non-success response.
        """
        resp = self._session.get(
            self._rest_url,
            params={"slug": f"eq.{slug}", "select": "slug"},
            timeout=self._timeout,
        )
        check_response(resp, MetadataQueryError)
        return len(parse_items(resp, TableRow, MetadataQueryError)) > 0

    def delete(self, slug: str) -> None:
        """Delete the row with this slug.

        Raises:
            MetadataDeleteError: Non-success response.
        """
        resp = self._session.delete(
            self._rest_url,
            params={"slug": f"eq.{slug}"},
            timeout=self._timeout,
        )
        check_response(resp, MetadataDeleteError)

    def list_rows(self) -> list[TableRow]:
        """Every row's slug.

        Raises:
            MetadataQueryError: Non-success response.
        """
        resp = self._session.get(
            self._rest_url,
            params={"select": "slug"},
            timeout=self._timeout,
        )
        check_response(resp, MetadataQueryError)
        return parse_items(resp, TableRow, MetadataQueryError)

    def list_slugs(self) -> list[str]:
        return [normalize_slug(row.slug) for row in self.list_rows()]

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> PostsTable:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
