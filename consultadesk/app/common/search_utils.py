from __future__ import annotations

from typing import Optional


def normalize_search_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    return text or None


def contains_folded(haystack: Optional[str], needle: str) -> bool:
    """Coincidencia por subcadena sin distinguir mayúsculas (needle ya normalizado)."""
    if not haystack:
        return False
    return needle.casefold() in haystack.casefold()
