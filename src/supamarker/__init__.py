# supamarker: markdown posts on Supabase
"""
Publish, list and delete markdown blog posts against Supabase:
- frontmatter: YAML frontmatter extraction
- slugs: slug derivation and normalization
- storage: markdown objects in the storage bucket
- table: metadata rows in the posts table (PostgREST)
- publisher: publish / delete / list orchestration
- cli: argparse entry point
"""

from .errors import (
    BackendError,
    FrontmatterError,
    FrontmatterParseError,
    MissingClosingDelimiter,
    MissingFrontmatter,
    PostNotFoundError,
    SupamarkerError,
)
from .frontmatter import parse_frontmatter
from .models import DeleteResult, FrontMatter, ListingEntry, Location, PostRow, PublishResult
from .publisher import delete_post, list_posts, publish_post, reconcile
from .slugs import normalize_slug, resolve_slug, slugify
from .storage import SupabaseStorage
from .table import PostsTable

__all__ = [
    "BackendError",
    "DeleteResult",
    "FrontMatter",
    "FrontmatterError",
    "FrontmatterParseError",
    "ListingEntry",
    "Location",
    "MissingClosingDelimiter",
    "MissingFrontmatter",
    "PostNotFoundError",
    "PostRow",
    "PostsTable",
    "PublishResult",
    "SupabaseStorage",
    "SupamarkerError",
    "delete_post",
    "list_posts",
    "normalize_slug",
    "parse_frontmatter",
    "publish_post",
    "reconcile",
    "resolve_slug",
    "slugify",
]
