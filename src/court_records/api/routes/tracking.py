from flask import Blueprint, jsonify
from flasgger import swag_from
from pydantic import ValidationError

from court_records import build_key_set, tracked_flags
from court_records.api import dependencies, models
from court_records.api.extensions import limiter
from court_records.grouping.results import row_from_item

tracking_bp = Blueprint('tracking', __name__)


@tracking_bp.route("/api/tracking/check", methods=["POST"])
@limiter.limit("120/minute")
@swag_from({
    'tags': ['tracking'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'rows': {'type': 'array', 'items': {'type': 'object'}},
            'tracked': {'type': 'array', 'items': {'type': 'object'}},
        }}
    }],
    'responses': {200: {'description': 'One flag per row'}}
})
def tracking_check():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    raw = dependencies.json_body()
    if raw is None:
        return jsonify({"error": "invalid_body"}), 400
    try:
        parsed = models.TrackingCheckRequest(**raw)
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors()}), 400
    key_set = build_key_set(parsed.tracked)
    rows = [row_from_item(r) for r in parsed.rows]
    return jsonify({"tracked": tracked_flags(rows, key_set), "known_keys": len(key_set)})
