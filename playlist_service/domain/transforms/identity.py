"""Slug derivation for playlist titles.

Slugs are deterministic and collision-prone: two titles can share a slug.
Uniqueness is the store's job, not this module's.
"""

import re
import unicodedata

_STRIP_RE = re.compile(r"[^a-z0-9\s_-]")
_SEPARATOR_RE = re.compile(r"[\s_-]+")


def normalize_title(title: str) -> str:
    """Derive a URL-safe, lowercase slug from a human title.

    Accents are folded to ASCII, punctuation is dropped, and runs of
    whitespace, hyphens and underscores collapse to a single hyphen.

    Args:
        title: Display title as entered by the owner

    Returns:
        The slug; empty when the title has no letters or digits

    Example:
        >>> normalize_title("My Mix!")
        'my-mix'
    """
    folded = unicodedata.normalize("NFKD", title)
    ascii_only = folded.encode("ascii", "ignore").decode("ascii").lower()
    stripped = _STRIP_RE.sub("", ascii_only)
    collapsed = _SEPARATOR_RE.sub("-", stripped)
    return collapsed.strip("-")
