"""Slug derivation from event titles.

Pure functions only: the query for colliding slugs is run by the caller
(see events.signals), which passes the matches back to ``next_slug``.
"""

import re
from collections.abc import Iterable

from events.domain.value_objects import SLUG_MAX_LENGTH

# ASCII word characters only; whitespace stays Unicode-aware.
_STRIP = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def base_slug(title: str) -> str:
    """Lower-case ``title`` and reduce it to word characters joined by hyphens."""
    slug = _STRIP.sub("", title.lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug).strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def collision_pattern(base: str) -> str:
    """Regex matching ``base`` and its numbered variants (``base-1``, ``base-2``...)."""
    return rf"^{re.escape(base)}(-[0-9]+)?$"


def next_slug(base: str, existing: Iterable[str]) -> str:
    """Pick the slug for a new title given the slugs already taken.

    The base is used as-is unless it is taken, in which case the highest
    numeric suffix found is incremented.
    """
    suffix = re.compile(rf"^{re.escape(base)}-([0-9]+)$")
    has_base = False
    highest = 0
    for slug in existing:
        slug = slug.lower()
        if slug == base:
            has_base = True
            continue
        match = suffix.match(slug)
        if match:
            highest = max(highest, int(match.group(1)))
    if not has_base:
        return base
    return f"{base}-{highest + 1}"


def shorten_base(base: str, candidate: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Trim ``base`` so the numeric suffix of ``candidate`` fits in ``max_length``."""
    suffix_length = len(candidate) - len(base)
    return base[: max_length - suffix_length].rstrip("-")
