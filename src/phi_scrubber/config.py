"""YAML/dict config loader for phi-scrubber.

Supports loading from a YAML file or a plain dict (for embedding
in a larger application config).

Example YAML:

    phi_scrubber:
      skip_categories: []        # e.g. [URL]; NAME disables name discovery
      allow_list:
        - Mercy                  # never treat as a name token
      extra_stopwords:
        - Tele
      strip_employers: true
      honorific_net: true
      extra_banned_keys:
        - guardianName
      logging:
        level: INFO
        json: false
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any

from .fields import BANNED_KEYS
from .middleware import SafetyNetMiddleware
from .redactor import Redactor, RedactorConfig
from .types import RedactionCategory

CONFIG_ENV = "PHI_SCRUBBER_CONFIG"
# Set on every dict load_config returns; raw input never carries it.
_NORMALIZED = "_phi_scrubber_normalized"


def _categories(names: list[str]) -> set[RedactionCategory]:
    out: set[RedactionCategory] = set()
    for name in names:
        try:
            out.add(RedactionCategory(str(name).upper()))
        except ValueError:
            valid = ", ".join(c.value for c in RedactionCategory)
            raise ValueError(f"unknown redaction category {name!r} (expected one of {valid})") from None
    return out


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "phi_scrubber" key or flat
    if "phi_scrubber" in data:
        data = data["phi_scrubber"] or {}

    logging_cfg = data.get("logging") or {}
    return {
        "skip_categories": _categories(data.get("skip_categories") or []),
        "allow_list": set(data.get("allow_list") or []),
        "extra_stopwords": set(data.get("extra_stopwords") or []),
        "strip_employers": bool(data.get("strip_employers", True)),
        "honorific_net": bool(data.get("honorific_net", True)),
        "banned_keys": BANNED_KEYS | frozenset(data.get("extra_banned_keys") or []),
        "log_level": str(logging_cfg.get("level", "INFO")).upper(),
        "log_json": bool(logging_cfg.get("json", False)),
        _NORMALIZED: True,
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(Path(path).expanduser()) as f:
        return load_config(yaml.safe_load(f))


def load_default() -> dict[str, Any]:
    """Config from $PHI_SCRUBBER_CONFIG if set, else built-in defaults."""
    path = os.environ.get(CONFIG_ENV)
    return load_from_yaml(path) if path else load_config({})


def _normalized(config: dict[str, Any]) -> dict[str, Any]:
    return config if config.get(_NORMALIZED) is True else load_config(config)


def create_redactor(config: dict[str, Any]) -> Redactor:
    """Create a fully configured redactor from a config dict."""
    cfg = _normalized(config)
    return Redactor(RedactorConfig(
        skip_categories=cfg["skip_categories"],
        allow_list=cfg["allow_list"],
        extra_stopwords=cfg["extra_stopwords"],
        strip_employers=cfg["strip_employers"],
        honorific_net=cfg["honorific_net"],
    ))


def create_middleware(config: dict[str, Any]) -> SafetyNetMiddleware:
    """Create the server-side safety net middleware from a config dict."""
    cfg = _normalized(config)
    return SafetyNetMiddleware(banned_keys=cfg["banned_keys"])
