"""
api.routes_import - /api/v1/import/<entity> endpoints.

Accepts CSV via multipart file upload or raw request body.
"""

from flask import Response, request, jsonify

import config
from api import api_bp
from import_engine import import_file, ImportAbortedError, MalformedFileError
from schema.entities import get_schema
from schema.templates import build_template, template_filename


def _flag(raw, default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@api_bp.route("/import/<entity>", methods=["POST"])
def api_import_csv(entity: str):
    """
    POST /api/v1/import/{partner|donor|company}?skip_duplicates=0|1&format=json|text

    Multipart: field name 'csv_file'
    Or: raw CSV as request body (Content-Type: text/csv).
    format=text returns only the error log as a download.
    """
    schema = get_schema(entity)
    skip = _flag(request.args.get("skip_duplicates"), config.DEFAULT_SKIP_DUPLICATES)

    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    try:
        result = import_file(content, schema.name, skip_duplicates=skip)
    except MalformedFileError as exc:
        return jsonify({"error": str(exc)}), 400
    except ImportAbortedError as exc:
        return jsonify({"error": str(exc), "result": exc.result.to_dict()}), 422

    if request.args.get("format") == "text":
        return Response(
            result.error_log(),
            mimetype="text/plain",
            headers={"Content-Disposition": "attachment; filename=import_errors.txt"},
        )
    return jsonify(result.to_dict())


@api_bp.route("/import/<entity>/template")
def api_import_template(entity: str):
    """GET /api/v1/import/{entity}/template → example CSV download."""
    schema = get_schema(entity)
    return Response(
        build_template(schema.name),
        mimetype="text/csv",
        headers={
            "Content-Disposition":
                f"attachment; filename={template_filename(schema.name)}",
        },
    )
