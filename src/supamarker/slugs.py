"""Slug derivation and normalization."""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path
from typing import Optional

from .errors import SlugError

MARKDOWN_SUFFIX = ".md"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Convert text to a URL- and path-safe slug.

    Examples:
        "Hello, World!" → "hello-world"
        "Café à Paris"  → "cafe-a-paris"
        "  --draft__2-- " → "draft-2"
    """
    ascii_text = (
        unicodedata.normalize("NFKD", text)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    return _NON_ALNUM_RE.sub("-", ascii_text.lower()).strip("-")


def resolve_slug(explicit: Optional[str], file_path: str | Path, title: str) -> str:
    """Pick the slug for a post.

    Precedence: explicit frontmatter slug (verbatim) > slugified file
    stem > slugified title.
    """
    if explicit:
        return explicit

    stem_slug = slugify(Path(file_path).stem)
    if stem_slug:
        return stem_slug

    title_slug = slugify(title)
    if title_slug:
        return title_slug

    raise SlugError(
        f"cannot derive a slug from {file_path!s} or title {title!r}; "
        "set `slug` in the frontmatter"
    )


def normalize_slug(name: str) -> str:
    """Strip one trailing ``.md`` so object names compare equal to slugs."""
    return name.removesuffix(MARKDOWN_SUFFIX)
