"""Slug Generation — derives URL-safe form identifiers from titles.

Invariants:
    - Output contains only [a-z0-9] and single "-" separators, never leading/trailing "-"
    - generate_slug is idempotent: generate_slug(generate_slug(t)) == generate_slug(t)
    - No uniqueness guarantee: collisions are resolved by the caller

Design Decisions:
    - ASCII-only alphabet: non-ASCII letters collapse into separators, so a title
      with no ASCII letters or digits yields "" (caller treats as invalid)
"""

import re

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """Lower-case, collapse every non-[a-z0-9] run to "-", trim edge dashes."""
    return _NON_SLUG_RUN.sub("-", title.lower()).strip("-")


def is_valid_slug(slug: str) -> bool:
    """True when slug is non-empty and already in canonical form."""
    return bool(slug) and generate_slug(slug) == slug
