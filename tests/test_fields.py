"""Tests for the structural field scrubber."""

import copy
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from phi_scrubber.fields import BANNED_KEYS, scrub_fields


def test_banned_keys_removed_at_any_depth():
    payload = {"patient": {"name": "Jane", "note": "ok"}, "meta": {"mrn": "123"}}
    assert scrub_fields(payload) == {"patient": {"note": "ok"}, "meta": {}}


def test_lists_are_walked():
    payload = {"notes": [{"email": "x@y.z", "text": "t"}, {"nested": [{"ssn": "1", "k": 2}]}]}
    assert scrub_fields(payload) == {"notes": [{"text": "t"}, {"nested": [{"k": 2}]}]}


def test_keys_match_exactly():
    payload = {"fullName": "A", "username": "b", "Name": "c", "accountNumber": "9"}
    assert scrub_fields(payload) == {"username": "b", "Name": "c"}


def test_input_not_mutated():
    payload = {"a": {"phone": "555"}, "b": [{"address": "x"}]}
    before = copy.deepcopy(payload)
    scrub_fields(payload)
    assert payload == before


def test_scalars_pass_through():
    assert scrub_fields("name") == "name"
    assert scrub_fields(None) is None
    assert scrub_fields(3) == 3


def test_custom_banned_set():
    assert scrub_fields({"guardian": "x", "name": "y"}, frozenset({"guardian"})) == {"name": "y"}


def test_banned_set_contents():
    assert {"name", "dob", "mrn", "ssn", "address", "phone", "email", "accountNumber"} <= BANNED_KEYS
