"""PHI Scrubber — rule-based de-identification of clinical notes."""

from .redactor import Redactor, RedactorConfig
from .middleware import SafetyNetMiddleware
from .config import create_middleware, create_redactor, load_config, load_from_yaml
from .fields import BANNED_KEYS, scrub_fields
from .safety_net import contains_likely_phi, is_phi_question, scan_safety_net
from .types import (
    DiffSegment, NoteDocument, NoteKind, RedactionCategory, SegmentKind,
)

__all__ = [
    "Redactor", "RedactorConfig",
    "SafetyNetMiddleware",
    "create_middleware", "create_redactor", "load_config", "load_from_yaml",
    "BANNED_KEYS", "scrub_fields",
    "contains_likely_phi", "is_phi_question", "scan_safety_net",
    "DiffSegment", "NoteDocument", "NoteKind", "RedactionCategory", "SegmentKind",
]
__version__ = "0.1.0"
