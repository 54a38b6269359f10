"""
utils/slug.py
-------------
URL slug helpers for briefs.
"""

import re

# ASCII word characters only: accented letters are dropped, not transliterated.
_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_SPACE_RE = re.compile(r"\s+")
_HYPHEN_RE = re.compile(r"-+")

FALLBACK_SLUG_RE = re.compile(r"^brief-(\d+)$")


def generate_slug(title: str) -> str:
    """
    Turn a title into a URL slug.

    Example:
        >>> generate_slug("NFL Playoffs -- Hype!")
        'nfl-playoffs-hype'

    A title made only of special characters yields an empty string.
    """
    slug = title.lower()
    slug = _STRIP_RE.sub("", slug)
    slug = _SPACE_RE.sub("-", slug)
    slug = _HYPHEN_RE.sub("-", slug)
    return slug.strip("-")


def disambiguate_slug(slug: str, entity_id: int) -> str:
    """Append the owning entity's id after a collision (``"" -> "-{id}"``)."""
    return f"{slug}-{entity_id}"


def fallback_slug(entity_id: int) -> str:
    """Slug reported for briefs stored without one."""
    return f"brief-{entity_id}"


def parse_fallback_slug(slug: str):
    """Return the id encoded in a ``brief-{digits}`` slug, else None."""
    match = FALLBACK_SLUG_RE.match(slug)
    return int(match.group(1)) if match else None
