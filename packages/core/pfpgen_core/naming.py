"""Export filename derivation from brand queries and titles."""

from __future__ import annotations

import re


_SCHEME_RE = re.compile(r"^(https?://)?(www\.)?", re.IGNORECASE)
_TLD_RE = re.compile(r"\.[a-z.]{2,}$", re.IGNORECASE)
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]+")


def _slugify(text: str) -> str:
    return _NON_ALNUM_RE.sub("_", text).strip("_").lower()


def brand_slug(query: str) -> str:
    """'https://www.Example.co.uk' -> 'example'."""
    query = query.strip()
    if not query:
        return ""
    query = _SCHEME_RE.sub("", query, count=1)
    query = _TLD_RE.sub("", query, count=1)
    return _slugify(query)


def brand_name_slug(title: str) -> str:
    return _slugify(title.strip())


def export_filename(size: int, brand_name: str = "", query: str = "") -> str:
    slug = brand_name or brand_slug(query)
    if slug:
        return f"{slug}.png"
    return f"pfp_{size}x{size}.png"
