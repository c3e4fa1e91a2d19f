"""Layer 2 — heuristic name discovery.

Each extractor is a small, independently testable pattern object.
They all scan the same hard-scrubbed text; their raw candidates are
then normalised into a document-scoped token set by extract_tokens().
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class ExtractorKind(str, Enum):
    LABELED = "labeled"          # "Name: John Doe", "Emergency Contact: DOE, JANE"
    RELATIONAL = "relational"    # "Sister: Maria", "husband John"
    NARRATIVE = "narrative"      # "John Doe is a 45-year-old ..."
    HONORIFIC = "honorific"      # "Mr. Smith"


@dataclass(frozen=True, slots=True)
class CandidateExtractor:
    """Pulls raw name candidates (group 1 of pattern) out of text."""
    kind: ExtractorKind
    pattern: re.Pattern
    # Whole-candidate values that are never names (matched case-insensitively)
    exclude: frozenset[str] = frozenset()

    def extract(self, text: str) -> list[str]:
        found: list[str] = []
        for m in self.pattern.finditer(text):
            value = m.group(1).strip()
            if value and value.lower() not in self.exclude:
                found.append(value)
        return found


_RELATIONS = "Relation|Sister|Brother|Mother|Father|Spouse|Wife|Husband|Son|Daughter|Partner"
_HONORIFICS = "Mr|Ms|Mrs|Mx|Miss"

# Capitalised word; allows all-caps ("DOE") and hyphen/apostrophe joins
_CAP_WORD = r"[A-Z][A-Za-z'\-]*"

EXTRACTORS: tuple[CandidateExtractor, ...] = (
    CandidateExtractor(
        ExtractorKind.LABELED,
        re.compile(
            r"\b(?i:Name|Patient|Pt|Contact|Kin|POA|Proxy|Provider)\s*[:\-#][ \t]*"
            r"(" + _CAP_WORD + r"(?:,[ \t]*" + _CAP_WORD + r")+"
            r"|" + _CAP_WORD + r"(?:[ \t]+" + _CAP_WORD + r"){0,3})"
        ),
        exclude=frozenset({
            "none", "tbd", "same", "call",
            "sister", "brother", "mother", "father", "spouse",
            "wife", "husband", "son", "daughter", "partner",
        }),
    ),
    CandidateExtractor(
        ExtractorKind.RELATIONAL,
        re.compile(
            r"(?:\b(?i:" + _RELATIONS + r")\b[ \t]*[:\-]?[ \t]*)+"
            r"([A-Z][a-z]+(?:[ \t,]+[A-Z][a-z]+)*)"
        ),
    ),
    CandidateExtractor(
        ExtractorKind.NARRATIVE,
        re.compile(
            r"\b([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){0,3})[ \t]+is a[ \t]+\d{1,3}[\- ]year[\- ]old\b"
        ),
    ),
    CandidateExtractor(
        ExtractorKind.NARRATIVE,
        re.compile(
            r"\b([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){0,3}),[ \t]+a[ \t]+\d{1,3}[\- ]year[\- ]old\b"
        ),
    ),
    CandidateExtractor(
        ExtractorKind.HONORIFIC,
        re.compile(
            r"\b(?:" + _HONORIFICS + r")\.?\s+([A-Z][a-z]+(?:[\-'][A-Z][a-z]+)?)"
        ),
    ),
)


def find_candidates(
    text: str,
    extractors: Iterable[CandidateExtractor] = EXTRACTORS,
) -> list[str]:
    """Run every extractor over text and concatenate their candidates.

    Order is not significant and duplicates are expected.
    """
    if not text:
        return []
    candidates: list[str] = []
    for extractor in extractors:
        candidates.extend(extractor.extract(text))
    return candidates


_MONTHS = (
    "january", "february", "march", "april", "may", "june", "july",
    "august", "september", "october", "november", "december",
)

STOPWORDS: frozenset[str] = frozenset({
    # relationships
    "relation", "sister", "brother", "mother", "father", "mom", "dad",
    "spouse", "wife", "husband", "son", "daughter", "partner",
    # honorifics
    "mr", "ms", "mrs", "mx", "miss", "dr", "doctor",
    # clinical roles and placeholder values
    "patient", "pt", "provider", "male", "female", "none", "tbd",
    "same", "call", "heme", "onc", "labs", "date",
    # narrative openers that are not names ("She is a 45-year-old ...")
    "the", "this", "that", "she", "her", "his", "him", "they", "their",
    "our", "who", "and",
    *_MONTHS,
})

_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")
_NON_NAME_CHARS_RE = re.compile(r"[^A-Za-z\-]")


def extract_tokens(
    candidates: Iterable[str],
    *,
    stopwords: frozenset[str] = STOPWORDS,
) -> set[str]:
    """Normalise raw candidates into atomic name tokens.

    Tokens keep their discovered case; matching downstream is
    case-insensitive.  Pure: the same candidates always give the
    same set.
    """
    tokens: set[str] = set()
    for candidate in candidates:
        for raw in _TOKEN_SPLIT_RE.split(candidate):
            token = _NON_NAME_CHARS_RE.sub("", raw).strip("-")
            if len(token) < 3:
                continue
            if token.lower() in stopwords:
                continue
            tokens.add(token)
    return tokens
