import time
import uuid
import json
import logging
from datetime import datetime, timezone
from flask import Flask, request, g, jsonify
from flask_cors import CORS
from flasgger import Swagger
from prometheus_client import Counter, Histogram
from werkzeug.exceptions import RequestEntityTooLarge
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

from court_records.api import config, state
from court_records.api.routes import parse_bp, tracking_bp, monitoring_bp
from court_records.api.extensions import limiter
from court_records.errors import UnsupportedSourceError

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger("api")


def _init_metrics():
    try:
        state.REQUEST_COUNT = Counter('court_records_requests_total', 'Total HTTP requests',
                                      ['method', 'endpoint', 'status'])
        state.REQUEST_LATENCY = Histogram('court_records_request_latency_seconds',
                                          'Request latency in seconds', ['endpoint'])
        state.DOCUMENTS_PARSED = Counter('court_records_documents_parsed_total',
                                         'Case detail documents parsed', ['source', 'outcome'])
    except ValueError:
        # already registered when the module is reloaded
        logger.debug("Prometheus collectors already registered")


def _init_sentry():
    if not config.SENTRY_DSN:
        return
    sentry_sdk.init(
        dsn=config.SENTRY_DSN,
        integrations=[FlaskIntegration()],
        traces_sample_rate=config.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=config.SENTRY_PROFILES_SAMPLE_RATE,
        environment=config.APP_ENV,
        release=config.APP_VERSION,
    )
    logger.info(f"Sentry initialized for {config.APP_ENV}")


_init_metrics()
_init_sentry()

app = Flask(__name__)
CORS(app)
Swagger(app, template={"info": {"title": "Court Records API", "version": config.APP_VERSION}})
app.config['MAX_CONTENT_LENGTH'] = config.MAX_CONTENT_LENGTH

limiter.init_app(app)

app.register_blueprint(parse_bp)
app.register_blueprint(tracking_bp)
app.register_blueprint(monitoring_bp)


@app.errorhandler(UnsupportedSourceError)
def _unsupported_source(e):
    return jsonify({"error": "unsupported_source", "detail": str(e)}), 400


@app.errorhandler(RequestEntityTooLarge)
def _too_large(_e):
    return jsonify({"error": "payload_too_large", "limit": config.MAX_CONTENT_LENGTH}), 413


@app.before_request
def _before_request():
    g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    g.started_at = time.time()
    g.endpoint_for_metrics = request.endpoint or request.path


def _access_log(response, duration):
    entry = {
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "lvl": "info",
        "request_id": getattr(g, 'request_id', None),
        "method": request.method,
        "path": request.path,
        "status": response.status_code,
        "duration_ms": int(duration * 1000),
        "bytes_in": request.content_length,
        "source": getattr(g, 'source', None),
        "remote_addr": request.headers.get('X-Forwarded-For', request.remote_addr),
    }
    logger.info(json.dumps(entry, ensure_ascii=False))


@app.after_request
def _after_request(response):
    duration = time.time() - getattr(g, 'started_at', time.time())
    _access_log(response, duration)
    endpoint = getattr(g, 'endpoint_for_metrics', request.path)
    if state.REQUEST_COUNT:
        state.REQUEST_COUNT.labels(request.method, endpoint, response.status_code).inc()
    if state.REQUEST_LATENCY:
        state.REQUEST_LATENCY.labels(endpoint).observe(duration)
    if getattr(g, 'request_id', None):
        response.headers["X-Request-ID"] = g.request_id
    return response


if __name__ == "__main__":
    app.run(debug=True, port=5002, host="0.0.0.0")
