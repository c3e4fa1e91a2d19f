"""Layer 1 — regex patterns for hard identifiers.

These run BEFORE name discovery.  They catch the structurally
recognisable stuff: emails, URLs, phones, SSNs, MRN labels, long
digit runs, DOB lines and street addresses.  Order matters: later
rules must only ever see text the earlier rules have already
replaced, never a half-matched fragment.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterable

from .types import RedactionCategory


@dataclass(frozen=True, slots=True)
class IdentifierRule:
    """A single pattern → placeholder substitution."""
    category: RedactionCategory
    pattern: re.Pattern

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.category.placeholder, text)


# "Dr" is handled separately: "Dr. Smith" is a clinician, not a street.
_STREET_SUFFIXES = (
    "St|Street|Ave|Avenue|Rd|Road|Blvd|Boulevard|Drive|Ln|Lane|Ct|Court|"
    "Way|Terrace|Ter|Place|Pl|Circle|Cir|Hwy|Highway"
)

HARD_IDENTIFIER_RULES: tuple[IdentifierRule, ...] = (
    # 1. Email
    IdentifierRule(RedactionCategory.EMAIL, re.compile(
        r"\b[A-Z0-9._%+\-]+@[A-Z0-9.\-]+\.[A-Z]{2,}\b", re.IGNORECASE,
    )),

    # 2. URLs
    IdentifierRule(RedactionCategory.URL, re.compile(
        r"\bhttps?://[^\s]+", re.IGNORECASE,
    )),

    # 3. Phone / fax: optional +1, optional parens, 10 digits
    IdentifierRule(RedactionCategory.PHONE, re.compile(
        r"(?<!\d)(?:\+?1[\-.\s]?)?\(?\d{3}\)?[\-.\s]?\d{3}[\-.\s]?\d{4}\b"
    )),

    # 4. SSN-shaped
    IdentifierRule(RedactionCategory.ID, re.compile(
        r"\b\d{3}-\d{2}-\d{4}\b"
    )),

    # 5. Labeled MRN / chart / account numbers (label is consumed too)
    IdentifierRule(RedactionCategory.ID, re.compile(
        r"\b(?:MRN|Med(?:ical)?\s*Record(?:\s*(?:Number|No\.?|#))?|Chart\s*Number|Account\s*Number)"
        r"\s*[:#]?[ \t]*[A-Za-z0-9\-]+\b",
        re.IGNORECASE,
    )),

    # 6. Bare 7–10 digit runs (unlabeled MRNs, account numbers)
    IdentifierRule(RedactionCategory.ID, re.compile(
        r"\b\d{7,10}\b"
    )),

    # 7. DOB lines, everything from the label to end of line
    IdentifierRule(RedactionCategory.DOB_LINE, re.compile(
        r"\b(?:DOB|Date of Birth|Birthdate)\b[^\n]*", re.IGNORECASE,
    )),

    # 8. US street addresses: number, one or two capitalised words, suffix
    IdentifierRule(RedactionCategory.ADDRESS, re.compile(
        r"\b\d{1,5}\s+[A-Z0-9][A-Za-z0-9.\-]*(?:[ \t]+[A-Z0-9][A-Za-z0-9.\-]*)?"
        r"\s+(?:(?i:" + _STREET_SUFFIXES + r")\b|(?i:Dr)\b(?!\.?\s+[A-Z]))"
    )),
)

# "works as a nurse at Mercy General" → "works as a nurse"
_EMPLOYER_RE = re.compile(
    r"\b(works|employed)\s+(as an?)\s+([^,.\n]+?)\s+(?:at|for)\s+[^,.\n]+",
    re.IGNORECASE,
)


def strip_employers(text: str) -> str:
    """Drop employer names from occupation clauses, keeping the role."""
    return _EMPLOYER_RE.sub(r"\1 \2 \3", text)


def scan_hard_identifiers(
    text: str,
    *,
    rules: Iterable[IdentifierRule] = HARD_IDENTIFIER_RULES,
    skip: Iterable[RedactionCategory] = (),
    employers: bool = True,
) -> str:
    """Replace every hard identifier in text with its placeholder.

    Total: text with nothing to redact comes back unchanged.
    """
    if not text:
        return text or ""
    skipped = frozenset(skip)
    out = text
    for rule in rules:
        if rule.category in skipped:
            continue
        out = rule.apply(out)
    if employers:
        out = strip_employers(out)
    return out
