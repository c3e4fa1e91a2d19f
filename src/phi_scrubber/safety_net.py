"""Server-side safety net.

A reduced hard-identifier pass run again after notes cross the trust
boundary, plus cheap detectors the request handlers use to reject or
short-circuit requests.  There is deliberately no name detection here:
names are discovered client-side against the original text.
"""

from __future__ import annotations
import re
from typing import Iterable

from .patterns import HARD_IDENTIFIER_RULES, scan_hard_identifiers
from .types import PLACEHOLDER_RE, NoteDocument, RedactionCategory

# Rules 1–7; the address pass is not repeated
SAFETY_NET_RULES = tuple(
    r for r in HARD_IDENTIFIER_RULES if r.category is not RedactionCategory.ADDRESS
)


def scan_safety_net(text: str) -> str:
    return scan_hard_identifiers(text, rules=SAFETY_NET_RULES, employers=False)


# Detection variants: same shapes, but a DOB label only counts with digits after it
_DETECTORS: tuple[re.Pattern, ...] = tuple(
    r.pattern for r in SAFETY_NET_RULES if r.category is not RedactionCategory.DOB_LINE
) + (
    re.compile(r"\b(?:DOB|Date of Birth|Birthdate)\b[^\n]*\d{2,4}", re.IGNORECASE),
    HARD_IDENTIFIER_RULES[-1].pattern,
)

_PHI_REQUEST_KEYWORDS = (
    "patient's name",
    "patients name",
    "what is the name",
    "full name",
    "first name",
    "last name",
    "mrn",
    "medical record number",
    "account number",
    "social security",
    "ssn",
    "date of birth",
    "birth date",
    "birthday",
    "dob",
    "phone number",
    "telephone",
    "email address",
    "home address",
    "street address",
    "where do they live",
)

_QUESTION_RE = re.compile(r"\?|^\s*(?:what|who|where|when|how)\b", re.IGNORECASE)


def is_phi_question(question: str | None) -> bool:
    """True if the question is asking for an identifier."""
    lower = PLACEHOLDER_RE.sub(" ", question or "").lower()
    return any(frag in lower for frag in _PHI_REQUEST_KEYWORDS)


def contains_likely_phi(text: str | None) -> bool:
    """Cheap check for obvious identifiers or PHI-seeking questions.

    Placeholders never count as PHI.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return False
    if any(p.search(trimmed) for p in _DETECTORS):
        return True
    return bool(_QUESTION_RE.search(trimmed)) and is_phi_question(trimmed)


def notes_contain_likely_phi(notes: Iterable[NoteDocument]) -> bool:
    return any(
        contains_likely_phi(n.text) or contains_likely_phi(n.title)
        for n in notes
    )
