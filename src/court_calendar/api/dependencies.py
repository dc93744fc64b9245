import logging
from typing import Optional
from flask import request

from court_calendar.api import config, state
from court_calendar.clients.openai_chat import ChatExtractionClient
from court_calendar.clients.supabase import (
    SupabaseAuditSink,
    SupabaseAuthenticator,
    SupabaseDocumentStore,
    SupabaseRegistryClient,
    SupabaseRest,
)
from court_calendar.errors import Unauthorized
from court_calendar.extraction.orchestrator import ExtractionOrchestrator
from court_calendar.registry.cache import RegistryStore

logger = logging.getLogger("api")


def build_services():
    """Wire collaborators from config into ``state``."""
    service = SupabaseRest(config.SUPABASE_URL, config.SUPABASE_SERVICE_ROLE_KEY, timeout=config.HTTP_TIMEOUT)
    anon = SupabaseRest(config.SUPABASE_URL, config.SUPABASE_ANON_KEY or config.SUPABASE_SERVICE_ROLE_KEY,
                        timeout=config.HTTP_TIMEOUT)
    if not service.configured:
        logger.warning("[api] SUPABASE_URL/SUPABASE_SERVICE_ROLE_KEY not set; registry and storage calls will fail")

    state.registry = RegistryStore(SupabaseRegistryClient(service), max_workers=config.REGISTRY_FETCH_WORKERS)
    state.authenticator = SupabaseAuthenticator(anon) if anon.configured else None
    ai_client = ChatExtractionClient(
        api_key=config.OPENAI_API_KEY,
        api_url=config.OPENAI_API_URL,
        model=config.OPENAI_MODEL,
        max_tokens=config.OPENAI_MAX_TOKENS,
        temperature=config.OPENAI_TEMPERATURE,
        timeout=config.OPENAI_TIMEOUT,
    )
    state.orchestrator = ExtractionOrchestrator(
        document_store=SupabaseDocumentStore(service, config.DOCUMENT_BUCKET),
        ai_client=ai_client,
        audit_sink=SupabaseAuditSink(service, config.AUDIT_TABLE),
        registry=state.registry,
        default_building=config.DEFAULT_BUILDING,
    )
    logger.info(f"[api] Services ready (ai_configured={ai_client.configured})")


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


def require_principal() -> str:
    token = bearer_token()
    if not token:
        raise Unauthorized()
    principal = state.authenticator.principal(token) if state.authenticator else None
    if not principal:
        raise Unauthorized("Invalid token")
    return principal
