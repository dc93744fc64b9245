import json

import pytest

from conftest import FakeAIClient, FakeAuditSink, FakeDocumentStore
from court_calendar.errors import (
    BadRequest,
    ExtractionFailed,
    MalformedResponse,
    NoDataExtracted,
    NotFound,
    ServiceUnavailable,
    Unauthorized,
)
from court_calendar.extraction.orchestrator import ExtractionOrchestrator, session_from_entry
from court_calendar.extraction.schemas import ExtractedCase, ExtractedEntry

PATH = "reports/daily.pdf"


def make(document_store, ai=None, audit=None, registry=None):
    return ExtractionOrchestrator(
        document_store=document_store,
        ai_client=ai or FakeAIClient(),
        audit_sink=audit,
        registry=registry,
        default_building="111",
    )


def test_successful_extraction(document_store):
    audit = FakeAuditSink()
    ai = FakeAIClient()
    result = make(document_store, ai, audit).extract("user-1", PATH)

    assert ai.documents == [b"%PDF-1.4 fake"]
    assert result.report_date == "2025-11-21"
    assert result.building == "111 Centre Street"
    assert result.report_type == "AM PM REPORT"
    assert [e.part for e in result.entries] == ["22", "TAP A / TAP G / GWP1"]
    assert result.entries[0].cases[0].defendant == "DOE, JOHN"
    assert result.entries[0].cases[1].case_count == 0
    assert result.sessions is None

    assert len(audit.records) == 1
    record = audit.records[0]
    assert record["file_path"] == PATH
    assert record["parts_extracted"] == 2
    assert record["total_cases"] == 2
    assert record["raw_response_length"] == len(ai.content)
    assert record["report_date"] == "2025-11-21"
    assert record["created_at"].endswith("Z")


@pytest.mark.parametrize("principal", [None, ""])
def test_requires_principal(document_store, principal):
    with pytest.raises(Unauthorized) as exc:
        make(document_store).extract(principal, PATH)
    assert exc.value.status_code == 401


@pytest.mark.parametrize("path", [None, "", "   ", 42, ["a.pdf"]])
def test_requires_file_path(document_store, path):
    with pytest.raises(BadRequest) as exc:
        make(document_store).extract("user-1", path)
    assert exc.value.status_code == 400


def test_requires_ai_credential(document_store):
    ai = FakeAIClient(configured=False)
    with pytest.raises(ServiceUnavailable) as exc:
        make(document_store, ai).extract("user-1", PATH)
    assert exc.value.status_code == 500
    assert ai.documents == []


def test_missing_document(document_store):
    with pytest.raises(NotFound) as exc:
        make(document_store).extract("user-1", "reports/missing.pdf")
    assert exc.value.status_code == 404


def test_empty_document():
    store = FakeDocumentStore({PATH: b""})
    with pytest.raises(NotFound):
        make(store).extract("user-1", PATH)


def test_ai_failure_propagates(document_store):
    audit = FakeAuditSink()
    with pytest.raises(ExtractionFailed):
        make(document_store, FakeAIClient(error=ExtractionFailed()), audit).extract("user-1", PATH)
    assert audit.records == []


@pytest.mark.parametrize("content", ["not json at all", "{\"entries\": [", "[1, 2, 3]", "null"])
def test_malformed_response(document_store, content):
    with pytest.raises(MalformedResponse) as exc:
        make(document_store, FakeAIClient(content=content)).extract("user-1", PATH)
    assert exc.value.status_code == 500


@pytest.mark.parametrize("payload", [{"entries": []}, {"report_date": "2025-11-21"}, {"entries": "none"}])
def test_no_data_extracted(document_store, payload):
    audit = FakeAuditSink()
    with pytest.raises(NoDataExtracted) as exc:
        make(document_store, FakeAIClient(content=json.dumps(payload)), audit).extract("user-1", PATH)
    assert exc.value.status_code == 422
    assert audit.records == []


def test_audit_failure_is_swallowed(document_store, caplog):
    result = make(document_store, audit=FakeAuditSink(fail=True)).extract("user-1", PATH)
    assert len(result.entries) == 2
    assert "Failed to log extraction metadata" in caplog.text


def test_header_backfilled_from_file_name():
    path = "uploads/11-21-25 AM PM REPORT 100 CENTRE.pdf"
    store = FakeDocumentStore({path: b"%PDF"})
    ai = FakeAIClient(content=json.dumps({"entries": [{"part": "1"}]}))
    result = make(store, ai).extract("user-1", path)
    assert result.report_date == "2025-11-21"
    assert result.building == "100 Centre Street"


def test_enriched_extraction(document_store, registry_store, registry_source):
    result = make(document_store, registry=registry_store).extract("user-1", PATH, enrich=True)

    assert registry_store.get().building == "111"
    first, second = result.sessions
    assert first.part_number == "22"
    assert first.room_number == "204"
    assert first.judge_name == "Hon. Ellen Smith"
    assert first.clerk_name == "Jones"
    assert first.absence_dates == ["11/26-11/28", "12/24"]
    assert first.calendar_day == "Cal Wed"
    assert first.confidence == 0.95
    assert first.cases[0]["defendant"] == "DOE, JOHN"

    assert second.part_number == "TAP A / TAP G / GWP1"
    assert second.room_number == ""
    assert second.confidence == 0.7

    # second extraction reuses the loaded registry
    make(document_store, registry=registry_store).extract("user-1", PATH, enrich=True)
    assert registry_source.calls["rooms"] == 1


def test_enrich_without_registry_returns_sessions(document_store):
    result = make(document_store).extract("user-1", PATH, enrich=True)
    assert [s.room_number for s in result.sessions] == [None, None]


def test_session_from_multiline_entry():
    entry = ExtractedEntry(
        part="TAP A / TAP G / GWP1\nCal Wk 2\nOWN\nOUT\n10/23\n10/24",
        judge="",
        out_dates=["10/23"],
        confidence=0.7,
        cases=[ExtractedCase(defendant="ROE")],
    )
    s = session_from_entry(entry)
    assert s.part_number == "TAP A / TAP G / GWP1"
    assert s.calendar_week == "2"
    assert s.calendar_day == "Cal Wk 2"
    assert s.absence_status == "OWN / OUT"
    assert s.absence_dates == ["10/23", "10/24"]
    assert s.cases == [ExtractedCase(defendant="ROE").model_dump()]
    assert s.confidence == 0.7


def test_oversized_numbers_in_ai_response(document_store):
    huge = '9' * 400
    content = '{"entries": [{"part": "22", "confidence": ' + huge + ', "cases": [{"case_count": ' + huge + '}]}]}'
    result = make(document_store, FakeAIClient(content=content)).extract("user-1", PATH)
    assert result.entries[0].confidence == 0.85
    assert result.entries[0].cases[0].case_count == 0
