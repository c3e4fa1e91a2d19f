"""Redactor — the main API.  Layered: hard identifiers, then names.

Usage:
    from phi_scrubber import Redactor, NoteDocument

    redactor = Redactor()        # reusable, holds no per-document state

    note = NoteDocument(id="note-1", title="Mr. Doe H&P",
                        text="John Doe is a 45-year-old ... MRN 1234567")
    clean = redactor.scrub_note(note)
    print(clean.text)            # "[REDACTED_NAME] [REDACTED_NAME] is a ... [REDACTED_ID]"

The name token set is discovered once per document from its title and
body, and applied to both.  Nothing is shared between documents.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable

from .names import STOPWORDS, extract_tokens, find_candidates
from .patterns import scan_hard_identifiers, strip_employers
from .scrubber import scrub_name_tokens
from .types import NoteDocument, RedactionCategory

logger = logging.getLogger(__name__)


@dataclass
class RedactorConfig:
    """Configuration for the Redactor."""
    # Categories to leave in place (NAME disables name discovery entirely)
    skip_categories: set[RedactionCategory] = field(default_factory=set)
    # Name tokens that should NEVER be redacted (case-insensitive)
    allow_list: set[str] = field(default_factory=set)
    # Extra words to treat as non-names, on top of the built-in blocklist
    extra_stopwords: set[str] = field(default_factory=set)
    strip_employers: bool = True     # "works as a nurse at X" → "works as a nurse"
    honorific_net: bool = True       # blind "Mr. <Word>" redaction


class Redactor:
    """Layered PHI redactor.

    Layer 1: Hard identifiers (emails, URLs, phones, IDs, DOB lines, addresses)
    Layer 2: Name discovery (labels, relations, narrative openers, honorifics)
    Layer 3: Global token scrub across every field of the document
    """

    def __init__(self, config: RedactorConfig | None = None) -> None:
        self.config = config or RedactorConfig()
        self._stopwords = STOPWORDS | {w.lower() for w in self.config.extra_stopwords}
        self._allowed = {w.lower() for w in self.config.allow_list}

    @property
    def names_enabled(self) -> bool:
        return RedactionCategory.NAME not in self.config.skip_categories

    def scan_hard(self, text: str) -> str:
        """Layer 1 only.  Employer clauses are left for `finish`."""
        return scan_hard_identifiers(
            text,
            skip=self.config.skip_categories,
            employers=False,
        )

    def finish(self, text: str, tokens: Iterable[str]) -> str:
        """Strip employers, then Layer 3.

        Runs after discovery so an employer clause cannot swallow a
        relational label before its name is collected.
        """
        if self.config.strip_employers:
            text = strip_employers(text)
        return self.apply_tokens(text, tokens)

    def discover_tokens(self, *texts: str) -> set[str]:
        """Build the name token set from already hard-scrubbed texts."""
        candidates: list[str] = []
        for text in texts:
            candidates.extend(find_candidates(text))
        tokens = extract_tokens(candidates, stopwords=self._stopwords)
        return {t for t in tokens if t.lower() not in self._allowed}

    def apply_tokens(self, text: str, tokens: Iterable[str]) -> str:
        """Layer 3 only."""
        if not self.names_enabled:
            return text
        return scrub_name_tokens(text, tokens, honorific_net=self.config.honorific_net)

    def scrub_text(self, text: str) -> str:
        """Run the full pipeline over a standalone string."""
        hard = self.scan_hard(text or "")
        tokens = self.discover_tokens(hard) if self.names_enabled else set()
        return self.finish(hard, tokens)

    def scrub_note(self, note: NoteDocument) -> NoteDocument:
        """Redact title and body with one shared token set.

        Returns a new NoteDocument with the same id and kind.
        """
        title = self.scan_hard(note.title or "")
        text = self.scan_hard(note.text or "")
        tokens = self.discover_tokens(title, text) if self.names_enabled else set()
        logger.debug("note %s: %d name tokens discovered", note.id, len(tokens))
        return note.replace_text(
            title=self.finish(title, tokens),
            text=self.finish(text, tokens),
        )

    def scrub_notes(self, notes: Iterable[NoteDocument]) -> list[NoteDocument]:
        """Redact each note independently."""
        return [self.scrub_note(n) for n in notes]

    def redact_messages(
        self,
        messages: list[dict],
        *,
        content_key: str = "content",
    ) -> list[dict]:
        """Redact PHI from a list of OpenAI-format messages.

        Returns new message dicts with content redacted.  Does NOT
        mutate the originals.
        """
        out: list[dict] = []
        for msg in messages:
            content = msg.get(content_key)
            if isinstance(content, str) and content:
                out.append({**msg, content_key: self.scrub_text(content)})
            else:
                out.append(msg)
        return out
