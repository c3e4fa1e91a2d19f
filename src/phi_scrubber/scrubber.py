"""Layer 3 — apply a document's name tokens everywhere.

Two passes, in order:
  1. Blind honorific net: "Mr. <Word>" is redacted whether or not the
     word was discovered as a token.
  2. Token pass: every token, whole-word and case-insensitive, in one
     longest-first alternation.  Tokens right after "Dr."/"Doctor" are
     left alone; clinician names are not PHI.
"""

from __future__ import annotations
import re
from typing import Iterable

from .types import RedactionCategory

_NAME = RedactionCategory.NAME.placeholder

_HONORIFIC_RE = re.compile(
    r"\b(Mr|Ms|Mrs|Mx|Miss)(\.?)\s+[A-Z][a-z]+(?:[\-'][A-Z][a-z]+)?\b"
)

# Python lookbehinds are fixed-width, hence one per spelling
_PROVIDER_LOOKBEHIND = r"(?<!Dr\.\s)(?<!Dr\s)(?<!Doctor\s)"


def scrub_honorifics(text: str) -> str:
    """Redact the word after any honorific, keeping the honorific."""
    return _HONORIFIC_RE.sub(lambda m: f"{m.group(1)}{m.group(2)} {_NAME}", text)


def build_token_pattern(tokens: Iterable[str]) -> re.Pattern | None:
    """Compile tokens into a single whole-word alternation, longest first.

    Returns None when there is nothing to match.
    """
    unique = {t for t in tokens if t}
    if not unique:
        return None
    ordered = sorted(unique, key=lambda t: (-len(t), t.lower()))
    alternation = "|".join(re.escape(t) for t in ordered)
    return re.compile(
        _PROVIDER_LOOKBEHIND + r"\b(?:" + alternation + r")\b",
        re.IGNORECASE,
    )


def scrub_name_tokens(
    text: str,
    tokens: Iterable[str],
    *,
    honorific_net: bool = True,
) -> str:
    """Redact every occurrence of the document's name tokens in text."""
    if not text:
        return text or ""
    out = scrub_honorifics(text) if honorific_net else text
    pattern = build_token_pattern(tokens)
    if pattern is not None:
        out = pattern.sub(_NAME, out)
    return out
