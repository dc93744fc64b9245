from flask import Blueprint, request, jsonify
from pydantic import ValidationError

from court_calendar.api import config, state, dependencies, models
from court_calendar.errors import ExtractionError

registry_bp = Blueprint('registry', __name__)


@registry_bp.route('/api/registry', methods=['GET'])
def registry_status():
    try:
        dependencies.require_principal()
    except ExtractionError as e:
        return jsonify(e.to_dict()), e.status_code
    cache = state.registry.get() if state.registry else None
    return jsonify({"loaded": cache is not None, "stats": cache.stats() if cache else None})


@registry_bp.route('/api/registry/reload', methods=['POST'])
def registry_reload():
    try:
        dependencies.require_principal()
    except ExtractionError as e:
        return jsonify(e.to_dict()), e.status_code
    raw = request.get_json(silent=True) or {}
    if not isinstance(raw, dict):
        return jsonify({"success": False, "error": "Body must be a JSON object"}), 400
    try:
        parsed = models.RegistryReloadRequest(**raw)
    except ValidationError as ve:
        return jsonify({"success": False, "error": "validation_failed",
                        "details": ve.errors(include_url=False, include_context=False)}), 400
    if state.registry is None:
        return jsonify({"success": False, "error": "Registry not configured"}), 503
    try:
        cache = state.registry.load(parsed.building or config.DEFAULT_BUILDING)
    except ExtractionError as e:
        return jsonify(e.to_dict()), e.status_code
    return jsonify({"success": True, "stats": cache.stats()})


@registry_bp.route('/api/registry', methods=['DELETE'])
def registry_clear():
    try:
        dependencies.require_principal()
    except ExtractionError as e:
        return jsonify(e.to_dict()), e.status_code
    if state.registry is not None:
        state.registry.clear()
    return jsonify({"success": True})
