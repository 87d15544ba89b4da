from datetime import date

from conftest import employee_fields
from hrdesk.forms import employee_form, new_employee_form, new_incident_form, new_review_form

TODAY = date(2024, 5, 17)


def test_new_review_defaults():
    form = new_review_form("42", today=TODAY)

    assert form["review_date"] == "2024-05-17"
    assert form["review_type"] == "Annual"
    assert form["overall_rating"] == 3
    assert set(form["performance"].values()) == {3}
    assert form["reviewer_id"] == "HR Manager"


def test_new_incident_defaults():
    form = new_incident_form("42", today=TODAY)

    assert form["incident_date"] == "2024-05-17"
    assert form["incident_type"] == "Other"
    assert form["severity"] == "Medium"
    assert form["status"] == "Open"
    assert form["reported_by"] == "HR Manager"


def test_forms_feed_store_operations(store):
    jane = store.add_employee(new_employee_form(first_name="Jane", last_name="Doe"))
    review = store.add_review(new_review_form(jane.id, today=TODAY, overall_rating=5))
    incident = store.add_incident(new_incident_form(jane.id, today=TODAY, severity="Low"))

    assert jane.status == "Active"
    assert review.overall_rating == 5
    assert incident.severity == "Low"


def test_edit_form_round_trips_through_update(store):
    jane = store.add_employee(employee_fields())
    form = employee_form(jane)
    form["department"] = "Platform"

    assert "id" not in form
    assert store.update_employee({**form, "id": jane.id})
    assert store.get_employee(jane.id).department == "Platform"
    assert store.get_employee(jane.id).emergency_contact.name == "John Doe"
