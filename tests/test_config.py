"""Tests for config loading."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from phi_scrubber import RedactionCategory
from phi_scrubber.config import (
    CONFIG_ENV, create_middleware, create_redactor, load_config, load_default, load_from_yaml,
)
from phi_scrubber.fields import BANNED_KEYS


def test_defaults():
    cfg = load_config({})
    assert cfg["skip_categories"] == set()
    assert cfg["strip_employers"] is True
    assert cfg["honorific_net"] is True
    assert cfg["banned_keys"] == BANNED_KEYS
    assert cfg["log_level"] == "INFO"
    assert cfg["log_json"] is False


def test_nested_and_flat_are_equivalent():
    flat = {"allow_list": ["Hope"], "skip_categories": ["url"]}
    assert load_config({"phi_scrubber": flat}) == load_config(flat)
    assert load_config(flat)["skip_categories"] == {RedactionCategory.URL}


def test_unknown_category_rejected():
    with pytest.raises(ValueError, match="unknown redaction category"):
        load_config({"skip_categories": ["IP_ADDRESS"]})


def test_load_from_yaml(tmp_path):
    path = tmp_path / "phi.yaml"
    path.write_text(
        "phi_scrubber:\n"
        "  allow_list: [Hope]\n"
        "  extra_banned_keys: [guardianName]\n"
        "  logging:\n"
        "    level: debug\n"
        "    json: true\n"
    )
    cfg = load_from_yaml(path)
    assert cfg["allow_list"] == {"Hope"}
    assert "guardianName" in cfg["banned_keys"]
    assert cfg["log_level"] == "DEBUG"
    assert cfg["log_json"] is True


def test_load_default_reads_env(tmp_path, monkeypatch):
    path = tmp_path / "phi.yaml"
    path.write_text("honorific_net: false\n")
    monkeypatch.setenv(CONFIG_ENV, str(path))
    assert load_default()["honorific_net"] is False
    monkeypatch.delenv(CONFIG_ENV)
    assert load_default()["honorific_net"] is True


def test_create_redactor_from_raw_dict():
    r = create_redactor({"allow_list": ["Hope"]})
    assert r.scrub_text("Sister: Hope") == "Sister: Hope"


def test_create_middleware_extra_keys():
    mw = create_middleware({"extra_banned_keys": ["guardianName"]})
    assert mw.pre_process({"guardianName": "X", "name": "Y", "k": 1}) == {"k": 1}


def test_raw_dict_with_banned_keys_is_still_normalized():
    raw = {"banned_keys": ["guardianName"], "allow_list": ["Hope"]}
    r = create_redactor(raw)
    assert r.scrub_text("Sister: Hope") == "Sister: Hope"
    mw = create_middleware(raw)
    assert mw.banned_keys == BANNED_KEYS


def test_normalized_dict_is_reused():
    cfg = load_config({"extra_banned_keys": ["guardianName"]})
    assert "guardianName" in create_middleware(cfg).banned_keys
