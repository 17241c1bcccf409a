"""
api.routes_schema - /api/v1/schema/* endpoints.

Expose the import schemas so a front end can show which columns each
entity accepts without hard-coding them.
"""

from flask import jsonify

from api import api_bp
from schema.entities import entity_names, get_schema


@api_bp.route("/schema/entities")
def schema_entities():
    """List importable entity names."""
    return jsonify(entity_names())


@api_bp.route("/schema/entities/<entity>")
def schema_entity(entity: str):
    """Field list, required flags, aliases and duplicate key for one entity."""
    return jsonify(get_schema(entity).to_dict())
