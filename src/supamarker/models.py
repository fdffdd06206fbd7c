"""Data models for supamarker."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FrontMatter(BaseModel):
    """YAML frontmatter at the top of a markdown post.

    Keys other than these four are ignored.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str
    summary: Optional[str] = None
    tags: Optional[list[str]] = None
    slug: Optional[str] = None


class PostRow(BaseModel):
    """Maps to a row of the posts table, keyed by `slug`."""
    slug: str
    title: str
    summary: str = ""
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_frontmatter(cls, slug: str, fm: FrontMatter) -> PostRow:
        return cls(
            slug=slug,
            title=fm.title,
            summary=fm.summary or "",
            tags=fm.tags or [],
        )


class StorageObject(BaseModel):
    """One entry of a storage bucket listing."""
    name: str


class TableRow(BaseModel):
    """A `select=slug` row from the posts table."""
    slug: str


class Location(str, Enum):
    """Where a slug was found."""
    BOTH = "both"
    BUCKET = "bucket"
    TABLE = "table"
    MISSING = "missing"


@dataclass
class ListingEntry:
    """One line of `supamarker list` output."""
    slug: str
    location: Location


@dataclass
class PublishResult:
    """Result of a successful publish."""
    slug: str
    title: str
    object_path: str  # "{bucket}/{slug}.md"


@dataclass
class DeleteResult:
    """Result of a delete run."""
    slug: str
    in_storage: bool
    in_table: bool
    storage_deleted: bool = False
    table_deleted: bool = False
    aborted: bool = False
