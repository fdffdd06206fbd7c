"""Minimal YAML frontmatter extractor for markdown posts.

A post starts with a block like::

    ---
    title: Hello
    tags: [intro]
    ---
    # Body starts here
"""

from __future__ import annotations

from typing import Optional

import yaml
from pydantic import ValidationError

from .errors import FrontmatterParseError, MissingClosingDelimiter
from .models import FrontMatter

DELIMITER = "---"


def parse_frontmatter(text: str) -> tuple[Optional[FrontMatter], str]:
    """Split ``text`` into its frontmatter and the remaining body.

    Returns:
        ``(None, text)`` when the text does not open with ``---``,
        otherwise ``(FrontMatter, body)`` with leading newlines removed
        from the body.

    Raises:
        MissingClosingDelimiter: No second ``---`` was found.
        FrontmatterParseError: The YAML is invalid or has no ``title``.
    """
    stripped = text.lstrip()
    if not stripped.startswith(DELIMITER):
        return None, text

    parts = stripped.split(DELIMITER, 2)
    if len(parts) < 3:
        raise MissingClosingDelimiter("no closing frontmatter marker")

    _, block, rest = parts

    try:
        data = yaml.safe_load(block.strip())
    except yaml.YAMLError as e:
        raise FrontmatterParseError(f"parsing YAML frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise FrontmatterParseError("parsing YAML frontmatter: expected a mapping of fields")

    try:
        fm = FrontMatter(**data)
    except (ValidationError, TypeError) as e:
        raise FrontmatterParseError(f"parsing YAML frontmatter: {e}") from e

    return fm, rest.lstrip("\n")
