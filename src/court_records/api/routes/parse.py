import logging
from typing import Any, Dict

from flask import Blueprint, g, jsonify
from flasgger import swag_from
from pydantic import ValidationError

from court_records import normalize_batch, parse_case_detail, parse_search_results
from court_records.api import config, dependencies, models, state
from court_records.api.extensions import limiter
from court_records.ingest.schemas import CaseRecord, ResultGroups

logger = logging.getLogger("api")

parse_bp = Blueprint('parse', __name__)


def record_json(record: CaseRecord) -> Dict[str, Any]:
    data = record.model_dump(mode="json")
    data['identifiers'] = sorted(record.identifiers)
    return data


def groups_json(groups: ResultGroups) -> Dict[str, Any]:
    return {
        "groups": {label: [r.model_dump(mode="json") for r in rows] for label, rows in groups.items()},
        "dropped": groups.dropped,
        "row_count": groups.row_count(),
    }


@parse_bp.route("/api/parse/detail", methods=["POST"])
@limiter.limit("60/minute")
@swag_from({
    'tags': ['parse'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'source': {'type': 'string', 'enum': ['supreme', 'high', 'district']},
            'markup': {'type': 'string'},
            'base_url': {'type': 'string'},
        }}
    }],
    'responses': {200: {'description': 'Normalized case record'}, 400: {'description': 'Invalid request'}}
})
def parse_detail():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    raw = dependencies.json_body()
    if raw is None:
        return jsonify({"error": "invalid_body"}), 400
    try:
        parsed = models.DetailRequest(**raw)
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors()}), 400
    g.source = parsed.source
    record = parse_case_detail(parsed.markup, parsed.source,
                               base_url=dependencies.base_url_or_default(parsed.base_url))
    state.record_parse(record.source_kind.value if record.source_kind else parsed.source, record.is_empty())
    return jsonify({"record": record_json(record), "empty": record.is_empty()})


@parse_bp.route("/api/parse/search", methods=["POST"])
@limiter.limit("60/minute")
@swag_from({
    'tags': ['parse'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'source': {'type': 'string', 'enum': ['supreme', 'high', 'district']},
            'payload': {'description': 'Search answer, HTML string or JSON'},
            'context': {'type': 'object'},
        }}
    }],
    'responses': {200: {'description': 'Rows grouped by sub-court'}, 400: {'description': 'Invalid request'}}
})
def parse_search():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    raw = dependencies.json_body()
    if raw is None:
        return jsonify({"error": "invalid_body"}), 400
    try:
        parsed = models.SearchResultsRequest(**raw)
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors()}), 400
    g.source = parsed.source
    groups = parse_search_results(parsed.payload, parsed.source, context=parsed.context,
                                  base_url=dependencies.base_url_or_default(parsed.base_url))
    state.record_search(groups.row_count(), groups.dropped)
    return jsonify(groups_json(groups))


@parse_bp.route("/api/parse/batch", methods=["POST"])
@limiter.limit("10/minute")
@swag_from({
    'tags': ['parse'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {'documents': {'type': 'array', 'items': {'type': 'object'}}}}
    }],
    'responses': {200: {'description': 'Case records in input order'}, 400: {'description': 'Invalid request'}}
})
def parse_batch():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    raw = dependencies.json_body()
    if raw is None:
        return jsonify({"error": "invalid_body"}), 400
    try:
        parsed = models.BatchRequest(**raw)
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors()}), 400
    if len(parsed.documents) > config.BATCH_SIZE_LIMIT:
        return jsonify({"error": "batch_too_large", "limit": config.BATCH_SIZE_LIMIT}), 413
    documents = [
        {"markup": d.markup, "source": d.source, "base_url": dependencies.base_url_or_default(d.base_url)}
        for d in parsed.documents
    ]
    records = normalize_batch(documents, max_workers=config.PARSE_WORKERS or None)
    logger.info(f"Batch normalized {len(records)} documents, {sum(r.is_empty() for r in records)} empty")
    for record in records:
        state.record_parse(record.source_kind.value if record.source_kind else "unknown", record.is_empty())
    return jsonify({"records": [record_json(r) for r in records], "count": len(records)})
