import pytest
from pydantic import ValidationError

from hrdesk.schema import (
    DOCUMENT_CATEGORIES,
    EMPLOYEE_STATUSES,
    Employee,
    EmployeeFields,
    Review,
    normalize_records,
    split_records,
)


def test_records_serialize_with_camel_case_names():
    employee = Employee(id="7", first_name="Jane", last_name="Doe", start_date="2021-03-01")

    data = employee.to_json()

    assert data["firstName"] == "Jane"
    assert data["startDate"] == "2021-03-01"
    assert data["emergencyContact"] == {"name": "", "phone": "", "relationship": ""}
    assert data["status"] == "Active"


def test_records_accept_either_name_form():
    a = EmployeeFields.model_validate({"firstName": "Jane", "lastName": "Doe"})
    b = EmployeeFields.model_validate({"first_name": "Jane", "last_name": "Doe"})

    assert a == b


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        EmployeeFields(first_name="Jane", last_name="Doe", status="Retired")


def test_enumerations():
    assert EMPLOYEE_STATUSES == ("Active", "Inactive", "On Leave")
    assert "Medical" in DOCUMENT_CATEGORIES


def test_records_are_immutable():
    employee = Employee(id="7", first_name="Jane", last_name="Doe")

    with pytest.raises(ValidationError):
        employee.first_name = "Janet"


def test_normalize_skips_bad_entries_and_fills_defaults(caplog):
    raw = [
        {"id": "1", "employeeId": "e1", "reviewDate": "2024-01-01", "overallRating": 5},
        "not a record",
        {"id": "2", "employeeId": "e1", "reviewDate": "2024-01-01", "reviewType": "Quarterly"},
        {"id": "3", "employeeId": "e2", "reviewDate": "2023-06-30"},
    ]

    reviews = normalize_records(Review, raw, "hr-reviews")

    assert [r.id for r in reviews] == ["1", "3"]
    assert reviews[1].performance.leadership == 3
    assert reviews[1].review_type == "Annual"
    assert "set aside 2" in caplog.text


def test_numbers_stored_for_text_fields_are_accepted():
    employee = Employee.model_validate({"id": "2", "firstName": "Old", "lastName": "Row", "salary": 95000})

    assert employee.salary == "95000"


def test_split_records_returns_rejected_entries_untouched():
    bad = {"id": "9", "firstName": "Ex", "lastName": "Staff", "status": "Retired"}

    records, rejected = split_records(Employee, [{"id": "1", "firstName": "A", "lastName": "B"}, bad, 7])

    assert [r.id for r in records] == ["1"]
    assert rejected == [bad, 7]
