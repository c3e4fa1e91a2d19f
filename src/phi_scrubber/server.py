"""HTTP sidecar server for phi-scrubber.

Runs as a lightweight stdlib HTTP server on localhost so a web app
can scrub notes without spawning a subprocess per request.

Endpoints:
    POST /scrub           — Full pipeline over notes      {"notes": [...]}
    POST /scrub-text      — Full pipeline over one string {"text": "..."}
    POST /diff            — Highlight segments            {"original": "...", "redacted": "..."}
    POST /safety-net      — Server-side pass over any request payload
    GET  /health          — Health check

All endpoints expect/return JSON.  Nothing is stored.
"""

from __future__ import annotations
import json
import logging
import os
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any

from .config import create_middleware, create_redactor, load_default
from .diff import changed_count, diff
from .middleware import SafetyNetMiddleware
from .redactor import Redactor
from .types import NoteDocument, count_placeholders

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("PHI_SCRUBBER_PORT", "18792"))

# Shared, immutable after first use
_redactor: Redactor | None = None
_middleware: SafetyNetMiddleware | None = None


def _get_redactor() -> Redactor:
    global _redactor
    if _redactor is None:
        _redactor = create_redactor(load_default())
    return _redactor


def _get_middleware() -> SafetyNetMiddleware:
    global _middleware
    if _middleware is None:
        _middleware = create_middleware(load_default())
    return _middleware


class BadRequest(ValueError):
    """Client sent a body we cannot interpret."""


class PHIHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the PHI scrubber sidecar."""

    def _read_json(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        try:
            data = json.loads(body) if body else {}
        except json.JSONDecodeError as e:
            raise BadRequest(f"invalid JSON body: {e.msg}") from None
        if not isinstance(data, dict):
            raise BadRequest("expected a JSON object")
        return data

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok"})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            body = self._read_json()

            if self.path == "/scrub":
                notes = [NoteDocument.from_dict(n) for n in body.get("notes", [])]
                scrubbed = _get_redactor().scrub_notes(notes)
                self._respond(200, {"notes": [n.to_dict() for n in scrubbed]})

            elif self.path == "/scrub-text":
                text = _get_redactor().scrub_text(body.get("text", ""))
                self._respond(200, {
                    "text": text,
                    "placeholders": {c.value: n for c, n in count_placeholders(text).items()},
                })

            elif self.path == "/diff":
                segments = diff(body.get("original", ""), body.get("redacted", ""))
                self._respond(200, {
                    "segments": [s.to_dict() for s in segments],
                    "changed": changed_count(segments),
                })

            elif self.path == "/safety-net":
                mw = _get_middleware()
                flagged = mw.inspect(body)
                self._respond(200, {"flagged": flagged, "data": mw.pre_process(body)})

            else:
                self._respond(404, {"error": "not found"})

        except (ValueError, TypeError, AttributeError) as e:
            self._respond(400, {"error": str(e)})
        except Exception:
            logger.exception("unhandled error on %s", self.path)
            self._respond(500, {"error": "internal error"})


def serve(port: int = DEFAULT_PORT) -> None:
    """Start the PHI scrubber HTTP sidecar."""
    server = HTTPServer(("127.0.0.1", port), PHIHandler)
    logger.info("phi-scrubber sidecar listening on http://127.0.0.1:%d", port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
        server.server_close()


if __name__ == "__main__":
    import argparse
    from .logging_config import configure_logging

    parser = argparse.ArgumentParser(description="PHI scrubber HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--log-level", default=os.environ.get("PHI_SCRUBBER_LOG_LEVEL", "INFO"))
    parser.add_argument("--log-json", action="store_true")
    args = parser.parse_args()
    configure_logging(args.log_level, args.log_json)
    serve(port=args.port)
