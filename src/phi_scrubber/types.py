"""Core types."""

from __future__ import annotations
import re
from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class RedactionCategory(str, Enum):
    """Closed set of placeholder categories emitted into redacted text."""
    EMAIL = "EMAIL"
    URL = "URL"
    PHONE = "PHONE"
    ID = "ID"
    DOB_LINE = "DOB_LINE"
    ADDRESS = "ADDRESS"
    NAME = "NAME"

    @property
    def placeholder(self) -> str:
        return f"[REDACTED_{self.value}]"


# Matches the seven placeholders and nothing else
PLACEHOLDER_RE = re.compile(
    r"\[REDACTED_(" + "|".join(c.value for c in RedactionCategory) + r")\]"
)


def count_placeholders(text: str) -> dict[RedactionCategory, int]:
    """Count placeholders per category in already-redacted text."""
    counts = Counter(RedactionCategory(m.group(1)) for m in PLACEHOLDER_RE.finditer(text or ""))
    return dict(counts)


class NoteKind(str, Enum):
    UNKNOWN = "unknown"
    ADMISSION = "admission"
    PROGRESS = "progress"
    DISCHARGE = "discharge"
    CONSULT = "consult"
    OPERATIVE = "operative"
    PROCEDURE = "procedure"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class NoteDocument:
    """A clinical note as handed to the pipeline. Never persisted."""
    id: str
    title: str = ""
    text: str = ""
    kind: NoteKind | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NoteDocument":
        if not isinstance(data, dict):
            raise ValueError(f"note must be an object, got {type(data).__name__}")
        for key in ("title", "text"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"note {key!r} must be a string, got {type(value).__name__}")
        kind = data.get("kind")
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            text=data.get("text") or "",
            kind=NoteKind(kind) if kind else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "title": self.title, "text": self.text}
        if self.kind is not None:
            out["kind"] = self.kind.value
        return out

    def replace_text(self, title: str, text: str) -> "NoteDocument":
        """Same id and kind, new title/text."""
        return replace(self, title=title, text=text)


class SegmentKind(str, Enum):
    SAME = "same"
    CHANGED = "changed"


@dataclass(frozen=True, slots=True)
class DiffSegment:
    """One whitespace-delimited word of the redacted text, for display."""
    kind: SegmentKind
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.kind.value, "text": self.text}
