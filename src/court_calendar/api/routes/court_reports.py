import logging
from flask import Blueprint, request, jsonify
from flasgger import swag_from
from pydantic import ValidationError

from court_calendar.api import state, dependencies, models, config
from court_calendar.api.extensions import limiter
from court_calendar.errors import BadRequest, ExtractionError
from court_calendar.parsing.part_column import parse_part_column

logger = logging.getLogger(__name__)
court_reports_bp = Blueprint('court_reports', __name__)

UNEXPECTED_ERROR = "An unexpected error occurred while processing the document."


def _failure(e: ExtractionError):
    return jsonify(e.to_dict()), e.status_code


@court_reports_bp.route("/api/court-reports/extract", methods=["POST"])
@limiter.limit(config.EXTRACT_RATE_LIMIT)
@swag_from({
    'tags': ['court-reports'],
    'consumes': ['application/json'],
    'parameters': [
        {'name': 'Authorization', 'in': 'header', 'type': 'string', 'required': True},
        {
            'name': 'body', 'in': 'body', 'required': True,
            'schema': {
                'type': 'object',
                'properties': {
                    'filePath': {'type': 'string', 'example': 'reports/11-21-25 AM PM REPORT 111 CENTRE.pdf'},
                    'enrich': {'type': 'boolean'},
                    'building': {'type': 'string', 'example': '111'},
                }
            }
        },
    ],
    'responses': {
        200: {'description': 'Extracted report'},
        400: {'description': 'Missing or invalid filePath'},
        401: {'description': 'Missing or invalid bearer token'},
        404: {'description': 'Document not found'},
        422: {'description': 'No sessions extracted'},
        500: {'description': 'Configuration, AI or parse failure'},
    }
})
def extract_report():
    try:
        principal = dependencies.require_principal()
        raw = request.get_json(silent=True)
        if not isinstance(raw, dict):
            raise BadRequest()
        try:
            parsed = models.ExtractRequest(**raw)
        except ValidationError as ve:
            bad_path = any(err.get('loc', ())[:1] == ('filePath',) for err in ve.errors())
            raise BadRequest(None if bad_path else "Invalid request body")
        enrich = parsed.enrich if parsed.enrich is not None else config.ENRICH_BY_DEFAULT
        result = state.orchestrator.extract(principal, parsed.filePath, enrich=enrich, building=parsed.building)
    except ExtractionError as e:
        logger.info(f"Extraction failed ({e.kind}): {e.message}")
        state.record_extraction(e.kind)
        return _failure(e)
    except Exception:
        logger.exception("Unexpected error in court report extraction")
        state.record_extraction('unexpected')
        return jsonify({"success": False, "error": UNEXPECTED_ERROR}), 500

    state.record_extraction('success', len(result.entries))
    extracted = result.model_dump()
    if extracted.get('sessions') is None:
        extracted.pop('sessions', None)
    return jsonify({"success": True, "extracted_data": extracted})


@court_reports_bp.route("/api/court-reports/enrich", methods=["POST"])
@limiter.limit("30/minute")
def enrich_sessions():
    """Enrich already-extracted sessions with room, judge and clerk from the registry."""
    try:
        dependencies.require_principal()
    except ExtractionError as e:
        return _failure(e)
    raw = request.get_json(silent=True)
    if not isinstance(raw, dict):
        return jsonify({"success": False, "error": "Body must be a JSON object"}), 400
    try:
        parsed = models.EnrichRequest(**raw)
    except ValidationError as ve:
        return jsonify({"success": False, "error": "validation_failed",
                        "details": ve.errors(include_url=False, include_context=False)}), 400
    try:
        sessions = state.orchestrator.enrich(parsed.sessions, parsed.building or config.DEFAULT_BUILDING)
    except ExtractionError as e:
        return _failure(e)
    return jsonify({"success": True, "sessions": [s.model_dump() for s in sessions]})


@court_reports_bp.route("/api/court-reports/decompose", methods=["POST"])
def decompose_part_column():
    """Split a Part/Judge cell into part, calendar week, statuses and absence dates."""
    try:
        dependencies.require_principal()
    except ExtractionError as e:
        return _failure(e)
    raw = request.get_json(silent=True)
    if not isinstance(raw, dict):
        return jsonify({"success": False, "error": "Body must be a JSON object"}), 400
    try:
        parsed = models.DecomposeRequest(**raw)
    except ValidationError as ve:
        return jsonify({"success": False, "error": "validation_failed",
                        "details": ve.errors(include_url=False, include_context=False)}), 400
    return jsonify({"success": True, "session": parse_part_column(parsed.text).model_dump()})
