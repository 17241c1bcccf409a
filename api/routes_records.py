"""
api.routes_records - /api/v1/records/<entity> listing endpoint.
"""

from flask import request, jsonify

import config
from api import api_bp
from db import get_session
from schema.entities import get_schema
from services.record_store import list_records


@api_bp.route("/records/<entity>")
def api_list_records(entity: str):
    """GET /api/v1/records/{entity}?limit=100&offset=0"""
    schema = get_schema(entity)
    try:
        limit = int(request.args.get("limit", config.API_DEFAULT_LIMIT))
        limit = max(min(limit, config.API_MAX_LIMIT), 1)
        offset = max(int(request.args.get("offset", 0)), 0)
    except ValueError:
        return jsonify({"error": "limit and offset must be integers"}), 400

    session = get_session()
    try:
        rows, total = list_records(session, schema.name, limit=limit, offset=offset)
        return jsonify({
            "entity": schema.name,
            "total": total,
            "offset": offset,
            "limit": limit,
            "records": [r.to_dict() for r in rows],
        })
    finally:
        session.close()
