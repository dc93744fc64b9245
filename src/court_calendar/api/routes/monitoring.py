import os
import platform
from flask import Blueprint, jsonify, Response

from court_calendar.api import config, state

monitoring_bp = Blueprint('monitoring', __name__)

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
        "ai_model": config.OPENAI_MODEL,
    })

@monitoring_bp.route("/api/version", methods=["GET"])
def api_version():
    return version()

@monitoring_bp.route("/api/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"}), 200

@monitoring_bp.route("/api/health/ready", methods=["GET"])
def health_ready():
    """Readiness probe - checks that the pipeline is wired and the AI credential is present."""
    checks = {
        'orchestrator_ready': state.orchestrator is not None,
        'ai_configured': bool(getattr(getattr(state.orchestrator, 'ai_client', None), 'configured', False)),
        'registry_configured': state.registry is not None,
    }
    all_ready = all(checks.values())
    return jsonify({
        "ready": all_ready,
        "checks": checks
    }), 200 if all_ready else 503

@monitoring_bp.route("/api/health/live", methods=["GET"])
def health_live():
    """Liveness probe - minimal check that service is running."""
    return jsonify({"alive": True}), 200

@monitoring_bp.route("/api/stats/extractions", methods=["GET"])
def extraction_stats():
    """Return extraction statistics for monitoring."""
    cache = state.registry.get() if state.registry else None
    return jsonify({
        "extractions": state.extraction_stats,
        "registry": cache.stats() if cache else None,
    })
