"""Split one raw log string into independent medication mentions."""

from __future__ import annotations

MENTION_SEPARATOR = ","


def split_mentions(raw_text: str | None) -> list[str]:
    """Return the trimmed, non-empty comma-separated mentions of ``raw_text``.

    ``"Percocet 5-325 (1 tablet), Celebrex 200mg"`` ->
    ``["Percocet 5-325 (1 tablet)", "Celebrex 200mg"]``
    """
    if not raw_text:
        return []
    return [piece.strip() for piece in raw_text.split(MENTION_SEPARATOR) if piece.strip()]
