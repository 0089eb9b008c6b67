"""
Flask web server for WingIt.

Routes
──────
GET  /health                               Liveness + personal index size
POST /api/tools/target_checklist           Run the target_checklist tool (JSON)
GET  /api/resources/personal-checklist     Read-only view of the personal export
GET  /api/prompts/field_checklist          field_checklist prompt messages
GET  /api/field-checklist/stream?location= SSE: run the tool, stream Claude's checklist
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request, stream_with_context
from pydantic import ValidationError

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config.settings import Settings
from wingit.checklist import build_seen_set, load_personal_checklist, personal_checklist_view
from wingit.ebird import EBirdClient
from wingit.errors import DataLoadError, EBirdError, InvalidInputError
from wingit.field_checklist import stream_field_checklist
from wingit.models import TargetFilters
from wingit.prompts import FIELD_CHECKLIST_DESCRIPTION, build_field_checklist_prompt
from wingit.tool import TargetChecklistTool

logger = logging.getLogger(__name__)


def _sse(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app.

    The personal checklist is mandatory: a missing path or unreadable file
    aborts startup with ``ValueError`` / ``DataLoadError``.
    """
    settings = settings or Settings()
    settings.validate()

    checklist = load_personal_checklist(settings.personal_json)
    seen = build_seen_set(checklist)
    logger.info("Loaded personal checklist: species=%d (seen set size)", len(seen))

    client = None
    if settings.ebird_api_token:
        client = EBirdClient(
            settings.ebird_api_token,
            base_url=settings.ebird_base_url,
            timeout=settings.ebird_timeout,
        )
    tool = TargetChecklistTool(settings, seen, client=client)

    app = Flask(__name__)
    app.config["WINGIT_TOOL"] = tool

    # ── Health ─────────────────────────────────────────────────────────────

    @app.route("/health")
    def health():
        return jsonify({"ok": True, "species": len(seen)})

    # ── Tool ───────────────────────────────────────────────────────────────

    @app.route("/api/tools/target_checklist", methods=["POST"])
    def target_checklist():
        """Run the tool on a JSON body of camelCase filters."""
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify({"error": "JSON object body is required"}), 400

        try:
            filters = TargetFilters.model_validate(body)
            response = tool.call(filters)
        except (ValidationError, InvalidInputError) as exc:
            return jsonify({"error": str(exc)}), 400
        except (EBirdError, DataLoadError) as exc:
            logger.error("Recent observations failed: %s", exc)
            return jsonify({"error": str(exc)}), 502

        return jsonify(response.model_dump(by_alias=True))

    # ── Resources + prompts ────────────────────────────────────────────────

    @app.route("/api/resources/personal-checklist")
    def personal_checklist():
        return jsonify(personal_checklist_view(checklist))

    @app.route("/api/prompts/field_checklist")
    def field_checklist_prompt():
        text = build_field_checklist_prompt(
            request.args.get("location", ""),
            request.args.get("dayRange", ""),
        )
        return jsonify(
            {
                "description": FIELD_CHECKLIST_DESCRIPTION,
                "messages": [{"role": "user", "content": text}],
            }
        )

    # ── Field checklist stream ─────────────────────────────────────────────

    @app.route("/api/field-checklist/stream")
    def field_checklist_stream():
        """SSE endpoint that runs the tool and streams a printable checklist.

        Query params: the same camelCase filters as the tool (``location``
        required).

        SSE events emitted:
          {"type": "summary", "text": "...", "data": {...}}   tool result
          {"type": "token",   "text": "..."}                 streaming text chunk
          {"type": "done",    "text": "..."}                 full checklist
          {"type": "error",   "message": "..."}              on failure
        """
        try:
            filters = TargetFilters.model_validate(request.args.to_dict())
            response = tool.call(filters)
        except (ValidationError, InvalidInputError) as exc:
            return jsonify({"error": str(exc)}), 400
        except (EBirdError, DataLoadError) as exc:
            return jsonify({"error": str(exc)}), 502

        def generate():
            yield _sse({
                "type": "summary",
                "text": response.summary,
                "data": response.result.model_dump(by_alias=True),
            })
            try:
                for event_type, payload in stream_field_checklist(response.result, settings):
                    if event_type == "token":
                        yield _sse({"type": "token", "text": payload})
                    elif event_type == "text":
                        yield _sse({"type": "done", "text": payload})
            except Exception as exc:
                logger.exception("Field checklist stream error for location=%r", filters.location)
                yield _sse({"type": "error", "message": str(exc)})

            yield "data: [DONE]\n\n"

        return Response(
            stream_with_context(generate()),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    settings = Settings()
    create_app(settings).run(debug=settings.debug, host="0.0.0.0", port=settings.port)
