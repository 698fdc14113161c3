import os
import platform
from flask import Blueprint, jsonify, Response

from court_records import parse_case_detail
from court_records.api import config, state

monitoring_bp = Blueprint('monitoring', __name__)

_HEALTH_SAMPLE = "<table><caption>Case Status</caption><tr><td>a</td></tr></table>"


@monitoring_bp.route("/metrics", methods=["GET"])
def metrics():
    from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)


@monitoring_bp.route("/version", methods=["GET"])
def version():
    return jsonify({
        "version": config.APP_VERSION,
        "env": config.APP_ENV,
        "commit": os.getenv("GIT_COMMIT"),
        "python": platform.python_version(),
    })


@monitoring_bp.route("/api/health", methods=["GET"])
def health():
    try:
        parse_case_detail(_HEALTH_SAMPLE, "district")
        return jsonify({"status": "ok", "stats": state.parse_stats}), 200
    except Exception as e:
        return jsonify({"status": "error", "detail": str(e)}), 500


@monitoring_bp.route("/api/health/live", methods=["GET"])
def health_live():
    """Liveness check: the service process is up."""
    return jsonify({"alive": True}), 200
