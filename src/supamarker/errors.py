"""Exceptions raised by supamarker operations.

Nothing here is caught below the CLI: every error propagates to the
invocation boundary, which prints it and exits non-zero.
"""

from __future__ import annotations


class SupamarkerError(Exception):
    """Base class for supamarker failures."""


class PostReadError(SupamarkerError):
    """The local markdown file could not be read."""


# --- Frontmatter ---


class FrontmatterError(SupamarkerError):
    """Base class for frontmatter problems."""


class MissingFrontmatter(FrontmatterError):
    """The file has no leading ``---`` block."""


class MissingClosingDelimiter(FrontmatterError):
    """The frontmatter block was opened but never closed."""


class FrontmatterParseError(FrontmatterError):
    """The frontmatter YAML is invalid or does not match the schema."""


class SlugError(SupamarkerError):
    """No usable slug could be derived for a post."""


class PostNotFoundError(SupamarkerError):
    """The slug exists in neither the bucket nor the table."""


# --- Backend HTTP errors ---


class BackendError(SupamarkerError):
    """A Supabase endpoint answered with a non-success status."""

    action = "Supabase request"

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"{self.action} failed: {status} - {body}")


class StorageUploadError(BackendError):
    action = "Storage upload"


class StorageDeleteError(BackendError):
    action = "Storage delete"


class StorageListError(BackendError):
    action = "Storage listing"


class MetadataUpsertError(BackendError):
    action = "DB upsert"


class MetadataDeleteError(BackendError):
    action = "DB delete"


class MetadataQueryError(BackendError):
    action = "DB query"
