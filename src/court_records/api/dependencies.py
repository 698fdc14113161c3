import logging
from typing import Any, Dict, Optional

from flask import request, jsonify

from court_records.api import config

logger = logging.getLogger("api")


def require_api_key():
    if config.API_KEY:
        key = request.headers.get("X-API-Key", "")
        if key != config.API_KEY:
            return jsonify({"error": "Unauthorized"}), 401
    return None


def json_body() -> Optional[Dict[str, Any]]:
    raw = request.get_json(silent=True)
    if not isinstance(raw, dict):
        return None
    return raw


def base_url_or_default(base_url: Optional[str]) -> Optional[str]:
    return base_url or config.DEFAULT_BASE_URL or None
