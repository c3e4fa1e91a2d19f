"""Request-boundary middleware — what the server runs on every payload.

Usage:

    mw = SafetyNetMiddleware()

    # Before any note-processing logic sees the request
    flagged = mw.inspect(payload)        # did it still look like PHI?
    safe_payload = mw.pre_process(payload)

    # Before sending to an LLM provider
    safe_messages = mw.pre_send(messages)

Only structural field stripping and the hard-identifier safety net run
here.  Name discovery needs the original text and happens upstream.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any

from .fields import BANNED_KEYS, scrub_fields
from .safety_net import contains_likely_phi, scan_safety_net

logger = logging.getLogger(__name__)

_NOTE_TEXT_KEYS = ("title", "text")


@dataclass
class SafetyNetMiddleware:
    """Defense-in-depth pass for payloads arriving from the client."""

    banned_keys: frozenset[str] = BANNED_KEYS

    def pre_process(self, payload: Any) -> Any:
        """Strip banned keys, then safety-net every note field and the question."""
        cleaned = scrub_fields(payload, self.banned_keys)
        if not isinstance(cleaned, dict):
            return cleaned

        notes = cleaned.get("notes")
        if isinstance(notes, list):
            cleaned["notes"] = [self._scrub_note(n) for n in notes]

        question = cleaned.get("question")
        if isinstance(question, str):
            cleaned["question"] = scan_safety_net(question)
        return cleaned

    def inspect(self, payload: Any) -> bool:
        """True if any note field or the question still looks like PHI."""
        if not isinstance(payload, dict):
            return False
        notes = payload.get("notes")
        for note in notes if isinstance(notes, list) else []:
            if isinstance(note, dict) and any(
                contains_likely_phi(note.get(k)) for k in _NOTE_TEXT_KEYS
                if isinstance(note.get(k), str)
            ):
                logger.warning("note %s arrived with likely PHI", note.get("id", "?"))
                return True
        question = payload.get("question")
        return isinstance(question, str) and contains_likely_phi(question)

    def pre_send(self, messages: list[dict], *, content_key: str = "content") -> list[dict]:
        """Safety-net outbound OpenAI-format messages.  Does not mutate input."""
        out: list[dict] = []
        for msg in messages:
            content = msg.get(content_key)
            if isinstance(content, str) and content:
                out.append({**msg, content_key: scan_safety_net(content)})
            else:
                out.append(msg)
        return out

    @staticmethod
    def _scrub_note(note: Any) -> Any:
        if not isinstance(note, dict):
            return note
        return {
            k: scan_safety_net(v) if k in _NOTE_TEXT_KEYS and isinstance(v, str) else v
            for k, v in note.items()
        }
