import os
import sys
import json

# Ensure the `src/` directory is on sys.path so we can import `court_calendar` package
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

import pytest

from court_calendar.registry.cache import RegistryCache, RegistryStore


ROOMS = [
    {"id": "1", "room_id": "R1", "room_number": "204", "courtroom_number": "Part 22", "is_active": True},
    {"id": "2", "room_id": "R2", "room_number": "1130", "courtroom_number": "PART 51", "is_active": True},
    {"id": "3", "room_id": "R3", "room_number": "300", "courtroom_number": "Jury Assembly", "is_active": True},
]
PERSONNEL = [
    {"id": "p1", "display_name": "Hon. Ellen Smith", "full_name": "Ellen Smith", "primary_role": "Judge"},
    {"id": "p2", "display_name": "", "full_name": "Laura Statsinger", "primary_role": None, "title": "Supreme Court Justice"},
    {"id": "p3", "display_name": "Mark Jones", "full_name": "Mark Jones", "primary_role": "Court Clerk"},
    {"id": "p4", "display_name": "Pat Smithers", "full_name": "Pat Smithers", "primary_role": "Court Officer"},
]
ASSIGNMENTS = [
    {"id": "a1", "room_id": "R1", "justice": "Smith", "clerks": ["Jones", "Brown"], "sergeant": "Lee"},
    {"id": "a2", "room_id": "R2", "justice": "Statsinger", "clerks": None, "sergeant": None},
]

REPORT = {
    "report_date": "2025-11-21",
    "building": "111 Centre Street",
    "report_type": "AM PM REPORT",
    "entries": [
        {
            "part": "22",
            "judge": "SMITH",
            "calendar_day": "Cal Wed",
            "out_dates": ["11/26-11/28", "12/24"],
            "confidence": 0.8,
            "cases": [
                {"sending_part": "PT 75", "defendant": " DOE, JOHN ", "purpose": "JS", "case_count": 2, "is_juvenile": False},
                {"status": "CALENDAR (0)"},
            ],
        },
        {
            "part": "TAP A / TAP G / GWP1",
            "judge": "",
            "calendar_day": "",
            "out_dates": [],
            "confidence": 0.7,
            "cases": [],
        },
    ],
}


class FakeRegistrySource:
    def __init__(self, rooms=None, personnel=None, assignments=None, fail=()):
        self.rooms = ROOMS if rooms is None else rooms
        self.personnel = PERSONNEL if personnel is None else personnel
        self.assignments = ASSIGNMENTS if assignments is None else assignments
        self.fail = set(fail)
        self.calls = {"rooms": 0, "personnel": 0, "assignments": 0}

    def _get(self, name):
        self.calls[name] += 1
        if name in self.fail:
            raise RuntimeError(f"{name} query failed")
        return getattr(self, name)

    def fetch_rooms(self):
        return self._get("rooms")

    def fetch_personnel(self):
        return self._get("personnel")

    def fetch_assignments(self):
        return self._get("assignments")


class FakeDocumentStore:
    def __init__(self, documents=None):
        self.documents = documents if documents is not None else {}

    def download(self, path):
        if path not in self.documents:
            raise FileNotFoundError(path)
        return self.documents[path]


class FakeAIClient:
    def __init__(self, content=None, configured=True, error=None):
        self.content = json.dumps(REPORT) if content is None else content
        self.configured = configured
        self.error = error
        self.documents = []

    def complete(self, document):
        self.documents.append(document)
        if self.error is not None:
            raise self.error
        return self.content


class FakeAuditSink:
    def __init__(self, fail=False):
        self.fail = fail
        self.records = []

    def write(self, record):
        if self.fail:
            raise RuntimeError("table pdf_extraction_logs does not exist")
        self.records.append(record)


class FakeAuthenticator:
    def __init__(self, tokens=None):
        self.tokens = tokens or {"good-token": "user-1"}

    def principal(self, token):
        return self.tokens.get(token)


@pytest.fixture
def cache():
    return RegistryCache.build(ROOMS, PERSONNEL, ASSIGNMENTS, building="111")


@pytest.fixture
def registry_source():
    return FakeRegistrySource()


@pytest.fixture
def registry_store(registry_source):
    return RegistryStore(registry_source)


@pytest.fixture
def document_store():
    return FakeDocumentStore({"reports/daily.pdf": b"%PDF-1.4 fake"})
