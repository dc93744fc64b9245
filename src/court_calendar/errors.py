"""Failure kinds surfaced by the extraction pipeline.

Every error is terminal for the request that raised it and carries the HTTP
status the API layer reports. Nothing here is retried automatically.
"""
from __future__ import annotations
from typing import Any, Dict


class ExtractionError(Exception):
    status_code = 500
    kind = "extraction_error"
    default_message = "An unexpected error occurred while processing the document."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class Unauthorized(ExtractionError):
    status_code = 401
    kind = "unauthorized"
    default_message = "Unauthorized"


class BadRequest(ExtractionError):
    status_code = 400
    kind = "bad_request"
    default_message = "filePath is required"


class ServiceUnavailable(ExtractionError):
    status_code = 500
    kind = "service_unavailable"
    default_message = "AI extraction service is not configured. OPENAI_API_KEY is missing."


class NotFound(ExtractionError):
    status_code = 404
    kind = "not_found"
    default_message = "Failed to download file: File not found"


class ExtractionFailed(ExtractionError):
    status_code = 500
    kind = "extraction_failed"
    default_message = "AI extraction failed. Please try again."


class MalformedResponse(ExtractionError):
    status_code = 500
    kind = "malformed_response"
    default_message = "AI response was not valid JSON. Please try again."


class NoDataExtracted(ExtractionError):
    status_code = 422
    kind = "no_data_extracted"
    default_message = "No court sessions could be extracted from the document."


class RegistryUnavailable(ExtractionError):
    status_code = 500
    kind = "registry_unavailable"
    default_message = "Court registry could not be loaded."


__all__ = [
    'ExtractionError', 'Unauthorized', 'BadRequest', 'ServiceUnavailable', 'NotFound',
    'ExtractionFailed', 'MalformedResponse', 'NoDataExtracted', 'RegistryUnavailable',
]
