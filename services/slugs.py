import re
import unicodedata
from typing import Iterable


def create_url_friendly(text: str) -> str:
    """Lowercase ascii words joined by hyphens"""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\s-]", "", text.lower())
    return re.sub(r"[-\s_]+", "-", text).strip("-")


def generate_slug(name: str, existing_slugs: Iterable[str]) -> str:
    """Slug for name that does not clash with any of existing_slugs.

    Clashes get a numeric suffix, e.g. "hello-world-2".
    """
    slug = create_url_friendly(name) or "topic"
    taken = set(existing_slugs)
    if slug not in taken:
        return slug
    suffix = 1
    while f"{slug}-{suffix}" in taken:
        suffix += 1
    return f"{slug}-{suffix}"
