"""In-memory bundle cache keyed by entry path.

Entries are never evicted: entry paths come from component registration, not
from request input, so the key set stays small and fixed.
"""

import logging

logger = logging.getLogger(__name__)


class BundleCache:
    """Mapping from entry path to bundled script text."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, entry_path: str) -> str | None:
        return self._entries.get(entry_path)

    def set(self, entry_path: str, bundled_text: str) -> None:
        # Concurrent builds of one entry produce identical bytes, last writer wins
        self._entries[entry_path] = bundled_text
        logger.debug(f"Cached bundle for {entry_path} ({len(self._entries)} entries)")

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, entry_path: object) -> bool:
        return entry_path in self._entries

    def __len__(self) -> int:
        return len(self._entries)
