"""Publish, delete and list markdown posts on Supabase.

Each operation is a short, strictly ordered sequence of HTTP calls against
the storage bucket and the posts table. Failures propagate immediately;
nothing is retried or rolled back.

Usage:
    storage = SupabaseStorage(config, session)
    table = PostsTable(config, session)

    publish_post("posts/hello-world.md", storage, table)
    delete_post("hello-world", storage, table, soft=True)
    entries = list_posts(storage, table)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from .errors import MissingFrontmatter, MetadataUpsertError, PostNotFoundError, PostReadError
from .frontmatter import parse_frontmatter
from .models import DeleteResult, ListingEntry, Location, PostRow, PublishResult
from .slugs import normalize_slug, resolve_slug
from .storage import SupabaseStorage
from .table import PostsTable

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


def prompt_confirm(question: str, input_fn: Callable[[str], str] = input) -> bool:
    """Ask a yes/no question on the console. Only "y"/"yes" count as yes.

    A closed or empty stdin counts as no.
    """
    try:
        answer = input_fn(f"{question} [y/N]: ")
    except EOFError:
        print()
        return False
    return answer.strip().lower() in ("y", "yes")


# ---------------------------------------------------------------------------
# Publish
# ---------------------------------------------------------------------------

def publish_post(
    path: str | Path,
    storage: SupabaseStorage,
    table: PostsTable,
) -> PublishResult:
    """Upload a markdown file and upsert its metadata row.

    Steps:
    1. Read the file and extract its frontmatter.
    2. Resolve the slug (frontmatter > file stem > title).
    3. Upload the raw markdown as ``{slug}.md``.
    4. Upsert ``{slug, title, summary, tags}`` into the table.

    If step 4 fails the uploaded file stays in the bucket without a row;
    publishing the same file again repairs it.
    """
    logger.info("Preparing %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            md = f.read()
    except OSError as e:
        raise PostReadError(f"reading {path}: {e}") from e

    fm, _ = parse_frontmatter(md)
    if fm is None:
        raise MissingFrontmatter(
            "Frontmatter not found or invalid. Provide YAML frontmatter."
        )

    slug = resolve_slug(fm.slug, path, fm.title)
    row = PostRow.from_frontmatter(slug, fm)

    logger.info("Uploading markdown to storage as %s", storage.object_path(slug))
    object_path = storage.upload_markdown(slug, md)
    print(f"✓ uploaded markdown to storage as {object_path}")

    logger.info("Upserting metadata into %s", table.name)
    try:
        table.upsert(row)
    except MetadataUpsertError:
        logger.warning(
            "%s was uploaded but has no %s row; re-run publish to fix",
            object_path, table.name,
        )
        raise
    print(f"✓ upserted metadata into {table.name} table for slug `{slug}`")
    print(f"Published ✅: {fm.title}")

    return PublishResult(slug=slug, title=fm.title, object_path=object_path)


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def delete_post(
    slug: str,
    storage: SupabaseStorage,
    table: PostsTable,
    soft: bool = False,
    confirm: ConfirmFn = prompt_confirm,
) -> DeleteResult:
    """Delete a post from the bucket and/or the table after confirmation.

    Storage is deleted before the table row. ``soft`` keeps the bucket
    file and removes only the row.

    Raises:
        PostNotFoundError: The slug exists in neither location.
    """
    slug = normalize_slug(slug)

    logger.info("Verifying `%s`", slug)
    in_storage = storage.exists(slug)
    in_table = table.exists(slug)
    result = DeleteResult(slug=slug, in_storage=in_storage, in_table=in_table)

    if not in_storage and not in_table:
        raise PostNotFoundError(
            f"Slug `{slug}` not found in storage or table; nothing to delete"
        )
    logger.info("Found in: storage=%s table=%s", in_storage, in_table)

    suffix = " (soft delete: keep bucket file)" if soft else ""
    if not confirm(f"Delete `{slug}`{suffix}?"):
        print("Aborted.")
        result.aborted = True
        return result

    if not soft and in_storage:
        logger.info("Deleting markdown from storage: %s", storage.object_path(slug))
        storage.delete(slug)
        result.storage_deleted = True
        print(f"✓ Deleted markdown from storage: {storage.object_path(slug)}")

    if in_table:
        logger.info("Deleting metadata from `%s`", table.name)
        table.delete(slug)
        result.table_deleted = True
        print(f"✓ Deleted metadata from {table.name} table for slug `{slug}`")

    print(f"Post `{slug}` deleted successfully ✅")
    return result


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------

def classify_location(in_storage: bool, in_table: bool) -> Location:
    if in_storage and in_table:
        return Location.BOTH
    if in_storage:
        return Location.BUCKET
    if in_table:
        return Location.TABLE
    return Location.MISSING


def reconcile(
    storage_slugs: Iterable[str],
    table_slugs: Iterable[str],
) -> list[ListingEntry]:
    """Classify every known slug by where it lives, sorted by slug.

    Both inputs must already be normalized (see ``normalize_slug``).
    """
    storage_set = set(storage_slugs)
    table_set = set(table_slugs)
    return [
        ListingEntry(
            slug=slug,
            location=classify_location(slug in storage_set, slug in table_set),
        )
        for slug in sorted(storage_set | table_set)
    ]


def list_posts(storage: SupabaseStorage, table: PostsTable) -> list[ListingEntry]:
    """Fetch both slug collections and reconcile them."""
    logger.info("Fetching storage objects from %s", storage.bucket)
    storage_slugs = storage.list_slugs()

    logger.info("Fetching table rows from %s", table.name)
    table_slugs = table.list_slugs()

    logger.debug("storage=%d table=%d", len(storage_slugs), len(table_slugs))
    return reconcile(storage_slugs, table_slugs)
