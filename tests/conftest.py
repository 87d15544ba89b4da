import itertools
from datetime import date

import pytest

from hrdesk.storage.json_file import JsonFileStorage
from hrdesk.storage.memory import MemoryStorage
from hrdesk.storage.sql import SqlStorage
from hrdesk.store import HRStore

TODAY = date(2024, 5, 17)


def sequential_ids(start: int = 1):
    counter = itertools.count(start)
    return lambda: str(next(counter))


def employee_fields(**overrides):
    fields = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane.doe@example.com",
        "phone": "555-0100",
        "position": "SWE",
        "department": "Eng",
        "startDate": "2021-03-01",
        "salary": "95000",
        "status": "Active",
        "emergencyContact": {"name": "John Doe", "phone": "555-0101", "relationship": "Spouse"},
    }
    fields.update(overrides)
    return fields


def review_fields(employee_id, **overrides):
    fields = {
        "employeeId": employee_id,
        "reviewDate": "2024-01-15",
        "reviewType": "Annual",
        "overallRating": 4,
        "performance": {"quality": 4, "productivity": 4, "communication": 3, "teamwork": 5, "leadership": 3},
        "goals": "Ship the billing rewrite",
        "reviewerId": "HR Manager",
    }
    fields.update(overrides)
    return fields


def incident_fields(employee_id, **overrides):
    fields = {
        "employeeId": employee_id,
        "incidentDate": "2024-02-02",
        "incidentType": "Safety",
        "severity": "High",
        "description": "Wet floor in the warehouse",
        "status": "Open",
        "reportedBy": "HR Manager",
    }
    fields.update(overrides)
    return fields


def document_fields(employee_id, **overrides):
    fields = {
        "employeeId": employee_id,
        "fileName": "contract.pdf",
        "fileType": "application/pdf",
        "category": "Contract",
        "description": "Signed contract",
        "fileData": "data:application/pdf;base64,JVBERi0=",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def json_storage(tmp_path):
    return JsonFileStorage(tmp_path / "json")


@pytest.fixture
def sqlite_storage(tmp_path):
    storage = SqlStorage.from_url(f"sqlite:///{tmp_path / 'hr.db'}")
    yield storage
    storage.close()


@pytest.fixture(params=["memory", "json", "sqlite"])
def any_storage(request):
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def store(memory_storage):
    hr = HRStore(memory_storage, id_factory=sequential_ids(), today=lambda: TODAY).init()
    yield hr
    hr.dispose()
