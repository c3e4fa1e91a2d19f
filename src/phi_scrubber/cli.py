"""CLI interface for phi-scrubber.

Usage:
    # Scrub notes (stdin: JSON array of {id, title, text, kind}, stdout: scrubbed JSON)
    echo '[{"id":"n1","title":"H&P","text":"Sister: Maria. Maria visited."}]' | \
        python -m phi_scrubber.cli scrub

    # Scrub plain text (stdin: text, stdout: JSON with text + placeholder counts)
    echo 'Call 555-123-4567' | python -m phi_scrubber.cli scrub-text

    # Redaction highlights (stdin: text; stdout: JSON segments)
    echo 'Mr. Smith seen' | python -m phi_scrubber.cli diff

    # Server-side safety net over a request payload (stdin/stdout: JSON)
    python -m phi_scrubber.cli safety-net < request.json

    # Exit 1 if text still looks like it contains PHI
    python -m phi_scrubber.cli check < note.txt

Nothing is written anywhere but stdout/stderr.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import create_middleware, create_redactor, load_default, load_from_yaml
from .diff import changed_count, diff
from .logging_config import configure_logging
from .safety_net import contains_likely_phi
from .types import NoteDocument, count_placeholders

logger = logging.getLogger(__name__)


def _load(args: argparse.Namespace) -> dict:
    return load_from_yaml(args.config) if args.config else load_default()


def _read_json() -> object:
    return json.loads(sys.stdin.read())


def _write_json(data: object) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_scrub(args: argparse.Namespace) -> int:
    """Scrub a JSON array of notes on stdin."""
    redactor = create_redactor(args.settings)
    raw = _read_json()
    if not isinstance(raw, list):
        raise ValueError("expected a JSON array of notes")
    notes = [NoteDocument.from_dict(n) for n in raw]
    _write_json([n.to_dict() for n in redactor.scrub_notes(notes)])
    logger.info("scrubbed %d notes", len(notes))
    return 0


def cmd_scrub_text(args: argparse.Namespace) -> int:
    """Scrub plain text on stdin."""
    redactor = create_redactor(args.settings)
    text = redactor.scrub_text(sys.stdin.read())
    _write_json({
        "text": text,
        "placeholders": {c.value: n for c, n in count_placeholders(text).items()},
    })
    return 0


def cmd_diff(args: argparse.Namespace) -> int:
    """Scrub stdin and emit highlight segments."""
    redactor = create_redactor(args.settings)
    original = sys.stdin.read()
    segments = diff(original, redactor.scrub_text(original))
    _write_json({
        "segments": [s.to_dict() for s in segments],
        "changed": changed_count(segments),
    })
    return 0


def cmd_safety_net(args: argparse.Namespace) -> int:
    """Strip banned keys and re-scan a request payload on stdin."""
    mw = create_middleware(args.settings)
    payload = _read_json()
    _write_json({"flagged": mw.inspect(payload), "data": mw.pre_process(payload)})
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Exit 1 if stdin looks like it still contains PHI."""
    if contains_likely_phi(sys.stdin.read()):
        sys.stderr.write("likely PHI detected\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="phi_scrubber",
        description="Rule-based PHI de-identification for clinical notes",
    )
    parser.add_argument("--config", default=None, help="YAML config path")
    parser.add_argument("--log-level", default=None, help="Logging level (overrides config)")
    parser.add_argument("--log-json", action="store_true", help="JSON log lines on stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("scrub", help="Scrub notes (JSON array on stdin)")
    sub.add_parser("scrub-text", help="Scrub plain text (stdin)")
    sub.add_parser("diff", help="Scrub stdin and show redaction highlights")
    sub.add_parser("safety-net", help="Server-side pass over a JSON payload (stdin)")
    sub.add_parser("check", help="Exit 1 if stdin looks like PHI")

    args = parser.parse_args(argv)

    cmds = {
        "scrub": cmd_scrub,
        "scrub-text": cmd_scrub_text,
        "diff": cmd_diff,
        "safety-net": cmd_safety_net,
        "check": cmd_check,
    }
    try:
        args.settings = _load(args)
        configure_logging(
            args.log_level or args.settings["log_level"],
            args.log_json or args.settings["log_json"],
        )
        return cmds[args.command](args)
    except (ValueError, OSError) as e:
        # json.JSONDecodeError is a ValueError
        sys.stderr.write(f"phi_scrubber: {e}\n")
        return 2


if __name__ == "__main__":
    sys.exit(main())
