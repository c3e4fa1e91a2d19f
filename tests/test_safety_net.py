"""Tests for the server-side safety net and request middleware."""

import copy
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from phi_scrubber import NoteDocument, Redactor, RedactionCategory, SafetyNetMiddleware
from phi_scrubber.safety_net import (
    SAFETY_NET_RULES, contains_likely_phi, is_phi_question, notes_contain_likely_phi,
    scan_safety_net,
)


# ── Safety net scan ──────────────────────────────────────────────────

def test_no_names_no_addresses():
    text = "Mr. Smith lives at 12 Oak St, call 555-123-4567"
    assert scan_safety_net(text) == "Mr. Smith lives at 12 Oak St, call [REDACTED_PHONE]"


def test_rules_are_first_seven():
    assert len(SAFETY_NET_RULES) == 7
    assert all(r.category is not RedactionCategory.ADDRESS for r in SAFETY_NET_RULES)


def test_catches_what_client_skipped():
    text = "MRN 1234567, DOB 1/2/1950, a@b.com"
    assert scan_safety_net(text) == "[REDACTED_ID], [REDACTED_DOB_LINE]"


def test_no_change_on_client_scrubbed_text():
    scrubbed = Redactor().scrub_text("Name: Ann Lee\nMRN 1234567\nSister: Kim called 555-123-4567")
    assert scan_safety_net(scrubbed) == scrubbed


# ── Detection ────────────────────────────────────────────────────────

def test_contains_likely_phi():
    assert contains_likely_phi("MRN 1234567")
    assert contains_likely_phi("reach me at a@b.com")
    assert contains_likely_phi("DOB 01/02/1950")
    assert contains_likely_phi("lives at 12 Oak St")


def test_placeholders_are_not_phi():
    assert not contains_likely_phi("[REDACTED_ID] and [REDACTED_DOB_LINE]?")


def test_dob_label_without_digits_is_not_phi():
    assert not contains_likely_phi("DOB: unknown")


def test_phi_seeking_questions():
    assert contains_likely_phi("What is the patient's name?")
    assert not contains_likely_phi("How is the potassium trending?")
    assert is_phi_question("what's her date of birth")
    assert not is_phi_question("what was the last sodium")


def test_empty_input():
    assert not contains_likely_phi("")
    assert not contains_likely_phi(None)
    assert not contains_likely_phi("   ")


def test_notes_contain_likely_phi():
    clean = NoteDocument(id="a", title="Day 2", text="Stable overnight.")
    dirty = NoteDocument(id="b", title="Call 555-123-4567", text="")
    assert not notes_contain_likely_phi([clean])
    assert notes_contain_likely_phi([clean, dirty])


# ── Middleware ───────────────────────────────────────────────────────

PAYLOAD = {
    "mode": "qa",
    "notes": [
        {"id": "n1", "title": "t", "text": "Call 555-123-4567", "name": "Jane"},
    ],
    "question": "Email a@b.com?",
    "patient": {"dob": "1/1/80", "age": 70},
}


def test_pre_process_strips_fields_then_scans():
    out = SafetyNetMiddleware().pre_process(PAYLOAD)
    assert out == {
        "mode": "qa",
        "notes": [{"id": "n1", "title": "t", "text": "Call [REDACTED_PHONE]"}],
        "question": "Email [REDACTED_EMAIL]?",
        "patient": {"age": 70},
    }


def test_pre_process_does_not_mutate():
    before = copy.deepcopy(PAYLOAD)
    SafetyNetMiddleware().pre_process(PAYLOAD)
    assert PAYLOAD == before


def test_pre_process_non_dict_payload():
    assert SafetyNetMiddleware().pre_process([{"mrn": "1"}, "x"]) == [{}, "x"]


def test_inspect():
    mw = SafetyNetMiddleware()
    assert mw.inspect(PAYLOAD)
    assert not mw.inspect({"notes": [{"id": "n", "text": "Stable."}], "question": "Plan for sodium?"})
    assert not mw.inspect("text")


def test_inspect_tolerates_non_list_notes():
    mw = SafetyNetMiddleware()
    for payload in ({"notes": 5}, {"notes": "MRN 1234567"}, {"notes": {"id": "n"}}):
        assert mw.inspect(payload) is False
    assert mw.inspect({"notes": 5, "question": "What is the MRN?"}) is True


def test_custom_banned_keys():
    mw = SafetyNetMiddleware(banned_keys=frozenset({"guardianName"}))
    assert mw.pre_process({"guardianName": "X", "name": "Y"}) == {"name": "Y"}


def test_pre_send():
    messages = [
        {"role": "system", "content": "Summarize."},
        {"role": "user", "content": "MRN 1234567"},
    ]
    safe = SafetyNetMiddleware().pre_send(messages)
    assert safe[0]["content"] == "Summarize."
    assert safe[1]["content"] == "[REDACTED_ID]"
    assert messages[1]["content"] == "MRN 1234567"
