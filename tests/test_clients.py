import base64

import pytest
import requests

from court_calendar.clients.openai_chat import ChatExtractionClient
from court_calendar.clients.supabase import (
    SupabaseAuditSink,
    SupabaseAuthenticator,
    SupabaseDocumentStore,
    SupabaseRegistryClient,
    SupabaseRest,
)
from court_calendar.errors import ExtractionFailed, MalformedResponse


class FakeResponse:
    def __init__(self, status_code=200, body=None, content=b"", text=""):
        self.status_code = status_code
        self._body = body
        self.content = content
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body

    def raise_for_status(self):
        if not self.ok:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def _record(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._record("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._record("POST", url, **kwargs)


def chat_body(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestChatExtractionClient:
    def test_payload_shape(self):
        client = ChatExtractionClient("sk-test", session=FakeSession())
        payload = client.build_payload(b"%PDF")
        assert payload["model"] == "gpt-4o"
        assert payload["max_tokens"] == 16000
        assert payload["temperature"] == 0.1
        assert payload["response_format"] == {"type": "json_object"}
        system, user = payload["messages"]
        assert system["role"] == "system"
        assert "entries" in system["content"]
        image = user["content"][1]["image_url"]
        assert image["detail"] == "high"
        assert image["url"] == "data:application/pdf;base64," + base64.b64encode(b"%PDF").decode()

    def test_complete_returns_content(self):
        session = FakeSession(FakeResponse(body=chat_body('{"entries": []}')))
        client = ChatExtractionClient("sk-test", api_url="http://ai.local/v1/chat", timeout=5, session=session)
        assert client.complete(b"%PDF") == '{"entries": []}'
        method, url, kwargs = session.calls[0]
        assert (method, url) == ("POST", "http://ai.local/v1/chat")
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["timeout"] == 5

    def test_configured(self):
        assert ChatExtractionClient("sk-test").configured
        assert not ChatExtractionClient("").configured
        assert not ChatExtractionClient(None).configured

    def test_transport_error(self):
        session = FakeSession(error=requests.exceptions.ConnectionError("refused"))
        with pytest.raises(ExtractionFailed) as exc:
            ChatExtractionClient("sk-test", session=session).complete(b"%PDF")
        assert exc.value.message == ExtractionFailed.default_message

    def test_http_error(self):
        session = FakeSession(FakeResponse(status_code=429, text="rate limited"))
        with pytest.raises(ExtractionFailed):
            ChatExtractionClient("sk-test", session=session).complete(b"%PDF")

    @pytest.mark.parametrize("body", [ValueError("not json"), {}, {"choices": []}, chat_body(""), chat_body(None)])
    def test_missing_content(self, body):
        session = FakeSession(FakeResponse(body=body))
        with pytest.raises(MalformedResponse):
            ChatExtractionClient("sk-test", session=session).complete(b"%PDF")


class TestSupabase:
    def rest(self, session):
        return SupabaseRest("http://db.local/", "anon-key", timeout=3, session=session)

    def test_configured(self):
        assert self.rest(FakeSession()).configured
        assert not SupabaseRest("", "key").configured
        assert not SupabaseRest("http://db.local", "").configured

    def test_fetch_rooms(self):
        rows = [{"room_id": "R1", "room_number": "204"}]
        session = FakeSession(FakeResponse(body=rows))
        assert SupabaseRegistryClient(self.rest(session)).fetch_rooms() == rows
        method, url, kwargs = session.calls[0]
        assert url == "http://db.local/rest/v1/court_rooms"
        assert kwargs["params"]["order"] == "room_number"
        assert kwargs["headers"]["apikey"] == "anon-key"

    def test_fetch_personnel_uses_rpc(self):
        session = FakeSession(FakeResponse(body=None))
        assert SupabaseRegistryClient(self.rest(session)).fetch_personnel() == []
        assert session.calls[0][1] == "http://db.local/rest/v1/rpc/list_personnel_profiles_minimal"

    def test_query_error_raises(self):
        session = FakeSession(FakeResponse(status_code=500))
        with pytest.raises(requests.exceptions.HTTPError):
            SupabaseRegistryClient(self.rest(session)).fetch_assignments()

    def test_download(self):
        session = FakeSession(FakeResponse(content=b"%PDF-1.4"))
        store = SupabaseDocumentStore(self.rest(session), "term-pdfs")
        assert store.download("2025/11 21 report.pdf") == b"%PDF-1.4"
        assert session.calls[0][1] == "http://db.local/storage/v1/object/term-pdfs/2025/11%2021%20report.pdf"

    def test_audit_insert(self):
        session = FakeSession(FakeResponse(status_code=201))
        SupabaseAuditSink(self.rest(session), "pdf_extraction_logs").write({"file_path": "a.pdf"})
        method, url, kwargs = session.calls[0]
        assert url == "http://db.local/rest/v1/pdf_extraction_logs"
        assert kwargs["json"] == {"file_path": "a.pdf"}
        assert kwargs["headers"]["Prefer"] == "return=minimal"

    def test_authenticator(self):
        session = FakeSession(FakeResponse(body={"id": "user-1"}))
        auth = SupabaseAuthenticator(self.rest(session))
        assert auth.principal("tok") == "user-1"
        assert session.calls[0][2]["headers"]["Authorization"] == "Bearer tok"
        assert auth.principal("") is None

    def test_authenticator_rejects(self):
        assert SupabaseAuthenticator(self.rest(FakeSession(FakeResponse(status_code=401)))).principal("bad") is None
        failing = FakeSession(error=requests.exceptions.Timeout("slow"))
        assert SupabaseAuthenticator(self.rest(failing)).principal("tok") is None

    @pytest.mark.parametrize("body", [ValueError("<html>gateway</html>"), ["user-1"], "user-1"])
    def test_authenticator_unreadable_body(self, body):
        auth = SupabaseAuthenticator(self.rest(FakeSession(FakeResponse(body=body))))
        assert auth.principal("tok") is None
