"""Supabase Storage — markdown files in the blog bucket.

Talks to the storage REST API directly:

    POST   {url}/storage/v1/object/{bucket}/{slug}.md   upload (multipart "file")
    HEAD   {url}/storage/v1/object/{bucket}/{slug}.md   existence check
    DELETE {url}/storage/v1/object/{bucket}/{slug}.md   delete
    POST   {url}/storage/v1/object/list/{bucket}        list ({"prefix": ""})

Usage:
    from src.supamarker.storage import SupabaseStorage

    with SupabaseStorage(config) as storage:
        storage.upload_markdown("hello-world", text)
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from src.common.config import ResolvedConfig

from .errors import StorageDeleteError, StorageListError, StorageUploadError
from .models import StorageObject
from .session import check_response, create_session, parse_items
from .slugs import MARKDOWN_SUFFIX, normalize_slug

logger = logging.getLogger(__name__)

MARKDOWN_CONTENT_TYPE = "text/markdown"


class SupabaseStorage:
    """Upload, check, delete and list markdown objects in one bucket."""

    def __init__(
        self,
        config: ResolvedConfig,
        session: Optional[requests.Session] = None,
    ):
        self._url = config.supabase_url
        self._bucket = config.bucket
        self._timeout = config.timeout
        self._session = session or create_session(config)

    @property
    def bucket(self) -> str:
        return self._bucket

    def object_name(self, slug: str) -> str:
        return f"{slug}{MARKDOWN_SUFFIX}"

    def object_path(self, slug: str) -> str:
        """Bucket-relative path shown to the user, e.g. ``blog/hello.md``."""
        return f"{self._bucket}/{self.object_name(slug)}"

    def object_url(self, slug: str) -> str:
        return f"{self._url}/storage/v1/object/{self._bucket}/{self.object_name(slug)}"

    def upload_markdown(self, slug: str, text: str) -> str:
        """Upload ``text`` as ``{slug}.md``, overwriting any previous version.

        Returns:
            The object path inside the bucket.

        Raises:
            StorageUploadError: Non-success response.
        """
        name = self.object_name(slug)
        files = {"file": (name, text.encode("utf-8"), MARKDOWN_CONTENT_TYPE)}
        resp = self._session.post(
            self.object_url(slug),
            files=files,
            headers={"x-upsert": "true"},
            timeout=self._timeout,
        )
        check_response(resp, StorageUploadError)
        logger.debug("Uploaded %s (%d bytes)", self.object_path(slug), len(files["file"][1]))
        return self.object_path(slug)

    def exists(self, slug: str) -> bool:
        """True if ``{slug}.md`` is in the bucket. Any non-2xx means absent."""
        resp = self._session.head(self.object_url(slug), timeout=self._timeout)
        logger.debug("HEAD %s -> %s", self.object_path(slug), resp.status_code)
        return resp.ok

    def delete(self, slug: str) -> None:
        """Delete ``{slug}.md`` from the bucket.

        Raises:
            StorageDeleteError: Non-success response.
        """
        resp = self._session.delete(self.object_url(slug), timeout=self._timeout)
        check_response(resp, StorageDeleteError)

    def list_objects(self) -> list[StorageObject]:
        """List the objects at the bucket root.

        Raises:
            StorageListError: Non-success response.
        """
        resp = self._session.post(
            f"{self._url}/storage/v1/object/list/{self._bucket}",
            json={"prefix": ""},
            timeout=self._timeout,
        )
        check_response(resp, StorageListError)
        return parse_items(resp, StorageObject, StorageListError)

    def list_slugs(self) -> list[str]:
        """Normalized slugs of every object at the bucket root."""
        return [normalize_slug(obj.name) for obj in self.list_objects()]

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> SupabaseStorage:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
