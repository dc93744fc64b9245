"""Chat-completions client for the AI extraction boundary.

A single request per document, no retries: the report is sent inline as a
base64 data URL and the model is constrained to answer with a JSON object.
"""
from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional

import requests  # type: ignore[import-untyped]

from court_calendar.errors import ExtractionFailed, MalformedResponse
from court_calendar.extraction.prompt import SYSTEM_PROMPT, USER_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"


class ChatExtractionClient:
    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        model: str = "gpt-4o",
        max_tokens: int = 16000,
        temperature: float = 0.1,
        timeout: float = 180.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or ""
        self.api_url = api_url
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, document: bytes) -> Dict[str, Any]:
        encoded = base64.b64encode(document).decode('ascii')
        return {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {
                    'role': 'user',
                    'content': [
                        {'type': 'text', 'text': USER_PROMPT},
                        {
                            'type': 'image_url',
                            'image_url': {'url': f"data:application/pdf;base64,{encoded}", 'detail': 'high'},
                        },
                    ],
                },
            ],
            'max_tokens': self.max_tokens,
            'temperature': self.temperature,
            'response_format': {'type': 'json_object'},
        }

    def complete(self, document: bytes) -> str:
        """Return the raw message content produced for ``document``."""
        headers = {
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json',
        }
        try:
            resp = self.session.post(self.api_url, json=self.build_payload(document),
                                     headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"AI extraction request failed: {e}")
            raise ExtractionFailed() from e

        if not resp.ok:
            logger.error(f"AI extraction API error {resp.status_code}: {resp.text[:500]}")
            raise ExtractionFailed()

        try:
            body = resp.json()
        except ValueError as e:
            raise MalformedResponse() from e

        content = None
        if isinstance(body, dict):
            choices = body.get('choices') or []
            if choices and isinstance(choices[0], dict):
                content = (choices[0].get('message') or {}).get('content')
        if not content:
            raise MalformedResponse("AI returned empty response.")
        return content
