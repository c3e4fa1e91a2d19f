"""Marker-based redaction highlights for the review UI.

Not a real diff: the pipeline only ever swaps whole tokens for
placeholders, so splitting the redacted text on whitespace and
flagging placeholder-bearing words is enough to show what changed.
Original spacing and line breaks are not preserved.
"""

from __future__ import annotations

from .types import PLACEHOLDER_RE, DiffSegment, SegmentKind


def diff(original: str, redacted: str) -> list[DiffSegment]:
    """Split redacted text into SAME/CHANGED word segments.

    `original` is accepted for interface symmetry; alignment is done
    on placeholder shape alone.
    """
    segments: list[DiffSegment] = []
    for word in (redacted or "").split():
        kind = SegmentKind.CHANGED if PLACEHOLDER_RE.search(word) else SegmentKind.SAME
        segments.append(DiffSegment(kind, word))
    return segments


def render(segments: list[DiffSegment]) -> str:
    """Re-join segments with single spaces."""
    return " ".join(s.text for s in segments)


def changed_count(segments: list[DiffSegment]) -> int:
    return sum(1 for s in segments if s.kind is SegmentKind.CHANGED)
