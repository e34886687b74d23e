"""
Persisted identifier generation for menu entries.

Ids are human-legible slugs derived from the entry title:
``"Pulsa & Data"`` becomes ``menu_pulsa_data``. When the slug is already
taken the next free numeric suffix is appended (``menu_pulsa_data_1``,
``menu_pulsa_data_2``, ...).
"""

import re
from typing import Iterable

ID_PREFIX = "menu_"

_INVALID_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase, drop characters outside ``[a-z0-9 ]`` and join words with ``_``."""
    cleaned = _INVALID_CHARS.sub("", (title or "").lower()).strip()
    return _WHITESPACE.sub("_", cleaned)


def generate_menu_id(title: str, existing_ids: Iterable[str]) -> str:
    """Return a persisted id for ``title`` that is not in ``existing_ids``.

    A title normalizing to an empty string yields the bare ``menu_`` base,
    suffixed the same way as any other base.
    """
    base_id = f"{ID_PREFIX}{normalize_title(title)}"

    sharing_base = [existing for existing in existing_ids if existing and existing.startswith(base_id)]
    if not sharing_base:
        return base_id

    suffix_pattern = re.compile(rf"^{re.escape(base_id)}_(\d+)$")
    highest = 0
    for existing in sharing_base:
        match = suffix_pattern.match(existing)
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{base_id}_{highest + 1}"
