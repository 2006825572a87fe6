from __future__ import annotations

from typing import Any, Protocol


class DocumentStore(Protocol):
    """
    A single JSON object persisted as a whole.
    """

    def load(self) -> dict[str, Any]:
        """Load and return the full document (never None)."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document, replacing what was there."""
        ...
