"""Thin Supabase REST adapters (PostgREST, Storage, Auth) over requests.

These are the external collaborators of the pipeline: the read-only court
registry, the report document store, the audit sink and token verification.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)


class SupabaseRest:
    def __init__(self, url: str, api_key: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.url = (url or "").rstrip('/')
        self.api_key = api_key or ""
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.url and self.api_key)

    def headers(self, bearer: Optional[str] = None, **extra: str) -> Dict[str, str]:
        h = {
            'apikey': self.api_key,
            'Authorization': f"Bearer {bearer or self.api_key}",
        }
        h.update(extra)
        return h

    def select(self, table: str, columns: str, order: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {'select': columns}
        if order:
            params['order'] = order
        resp = self.session.get(f"{self.url}/rest/v1/{table}", params=params,
                                headers=self.headers(), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json() or []

    def rpc(self, function: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        resp = self.session.post(f"{self.url}/rest/v1/rpc/{function}", json=payload or {},
                                 headers=self.headers(), timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def insert(self, table: str, row: Dict[str, Any]) -> None:
        resp = self.session.post(f"{self.url}/rest/v1/{table}", json=row,
                                 headers=self.headers(Prefer='return=minimal'), timeout=self.timeout)
        resp.raise_for_status()


class SupabaseRegistryClient:
    """Registry queries used to build the enrichment cache."""

    def __init__(self, rest: SupabaseRest):
        self.rest = rest

    def fetch_rooms(self) -> List[Dict[str, Any]]:
        return self.rest.select('court_rooms', 'id,room_id,room_number,courtroom_number,is_active', order='room_number')

    def fetch_personnel(self) -> List[Dict[str, Any]]:
        return self.rest.rpc('list_personnel_profiles_minimal') or []

    def fetch_assignments(self) -> List[Dict[str, Any]]:
        return self.rest.select('court_assignments', 'id,room_id,justice,clerks,sergeant')


class SupabaseDocumentStore:
    def __init__(self, rest: SupabaseRest, bucket: str):
        self.rest = rest
        self.bucket = bucket

    def download(self, path: str) -> bytes:
        url = f"{self.rest.url}/storage/v1/object/{self.bucket}/{quote(path.lstrip('/'))}"
        resp = self.rest.session.get(url, headers=self.rest.headers(), timeout=self.rest.timeout)
        resp.raise_for_status()
        return resp.content


class SupabaseAuditSink:
    def __init__(self, rest: SupabaseRest, table: str):
        self.rest = rest
        self.table = table

    def write(self, record: Dict[str, Any]) -> None:
        self.rest.insert(self.table, record)


class SupabaseAuthenticator:
    """Resolves a bearer token to a user id via the auth service."""

    def __init__(self, rest: SupabaseRest):
        self.rest = rest

    def principal(self, token: str) -> Optional[str]:
        if not token:
            return None
        try:
            resp = self.rest.session.get(f"{self.rest.url}/auth/v1/user",
                                         headers=self.rest.headers(bearer=token), timeout=self.rest.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Token verification request failed: {e}")
            return None
        if resp.status_code != 200:
            return None
        try:
            data = resp.json() or {}
        except ValueError:
            logger.warning("Token verification returned a non-JSON body")
            return None
        if not isinstance(data, dict):
            return None
        return data.get('id') or None


__all__ = [
    'SupabaseRest', 'SupabaseRegistryClient', 'SupabaseDocumentStore',
    'SupabaseAuditSink', 'SupabaseAuthenticator',
]
