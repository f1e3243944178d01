"""WCAG Rule Engine Flask web application."""

from __future__ import annotations

import io
import logging
import os

from flask import Flask, jsonify, request, send_file

from wcag_engine.models import PayloadError
from wcag_engine.operations import (
    CATALOG_OPERATIONS,
    ChecklistQuery,
    UnknownOperationError,
    call_tool,
    checklist,
    filter_criteria,
    get_operation,
    list_operations,
    run_operation,
)
from wcag_engine.report import format_tool_response
from wcag_engine.report_generator import generate_report_pdf

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application setup
# ---------------------------------------------------------------------------

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", os.urandom(24))
app.config["MAX_CONTENT_LENGTH"] = int(os.environ.get("MAX_PAYLOAD_BYTES", 1024 * 1024))


def _json_payload():
    """Return the request body as a dict, or ``None`` if it is not a JSON object."""
    if not request.data:
        return {}
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else None


def _run(operation: str):
    """Run *operation* on the request body; returns ``(report, error_response)``."""
    payload = _json_payload()
    if payload is None:
        return None, (jsonify({"error": "Request body must be a JSON object"}), 400)
    try:
        return run_operation(operation, payload), None
    except UnknownOperationError:
        logger.warning("Unknown operation requested: %s", operation)
        return None, (jsonify({"error": f"Unknown operation: {operation}"}), 404)
    except PayloadError as exc:
        return None, (jsonify({"error": str(exc)}), 400)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.route("/")
def index():
    return jsonify(
        {
            "operations": [
                {
                    "name": op.name,
                    "category": op.category,
                    "title": op.title,
                    "description": op.description,
                }
                for op in list_operations()
            ],
            "catalog": sorted(CATALOG_OPERATIONS),
        }
    )


@app.route("/check/<operation>", methods=["POST"])
def check(operation: str):
    report, error = _run(operation)
    if error is not None:
        return error
    return jsonify(
        {
            "summary": report.summary.to_dict(),
            "human": report.human,
            "machine": report.machine,
            "content": format_tool_response(report),
        }
    )


@app.route("/report/<operation>.pdf", methods=["POST"])
def report_pdf(operation: str):
    report, error = _run(operation)
    if error is not None:
        return error
    title = request.args.get("title") or get_operation(operation).title
    pdf_bytes = generate_report_pdf(report, title=title)
    return send_file(
        io.BytesIO(pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=f"{operation}_report.pdf",
    )


@app.route("/tools/<name>", methods=["POST"])
def tool(name: str):
    """Tool-style call: always 200, failures carry ``isError``."""
    payload = _json_payload()
    if payload is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    return jsonify(call_tool(name, payload))


@app.route("/criteria")
def criteria():
    try:
        found = filter_criteria(request.args.get("level"), request.args.get("category"))
    except PayloadError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"total": len(found), "criteria": [c.to_dict() for c in found]})


@app.route("/checklist/<level>")
def get_checklist(level: str):
    try:
        content = checklist(ChecklistQuery(level=level))
    except PayloadError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"level": level, "content": content})


@app.errorhandler(413)
def payload_too_large(_err):
    return jsonify({"error": "Payload too large"}), 413


# ---------------------------------------------------------------------------

if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(
        debug=os.environ.get("FLASK_DEBUG") == "1",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 5000)),
    )
