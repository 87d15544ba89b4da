# hrdesk/forms.py
#
# Starting values for the add/edit forms. Each function returns a plain dict
# keyed by snake_case field name; overrides are applied on top and the
# result can be passed straight to the matching HRStore.add_* call.

from datetime import date
from typing import Any, Optional

from hrdesk.schema import Employee

DEFAULT_REVIEWER = "HR Manager"
DEFAULT_SCORE = 3


def _today_iso(today: Optional[date]) -> str:
    return (today or date.today()).isoformat()


def new_employee_form(**overrides: Any) -> dict[str, Any]:
    form = {
        "first_name": "",
        "last_name":  "",
        "email":      "",
        "phone":      "",
        "position":   "",
        "department": "",
        "start_date": "",
        "salary":     "",
        "status":     "Active",
        "emergency_contact": {"name": "", "phone": "", "relationship": ""},
    }
    form.update(overrides)
    return form


def employee_form(employee: Employee) -> dict[str, Any]:
    """Editable fields of an existing employee (everything but the id)."""
    return employee.model_dump(exclude={"id"})


def new_review_form(employee_id: str = "", today: Optional[date] = None, **overrides: Any) -> dict[str, Any]:
    form = {
        "employee_id":    employee_id,
        "review_date":    _today_iso(today),
        "review_type":    "Annual",
        "overall_rating": DEFAULT_SCORE,
        "performance": {
            "quality":       DEFAULT_SCORE,
            "productivity":  DEFAULT_SCORE,
            "communication": DEFAULT_SCORE,
            "teamwork":      DEFAULT_SCORE,
            "leadership":    DEFAULT_SCORE,
        },
        "goals":                 "",
        "achievements":          "",
        "areas_for_improvement": "",
        "comments":              "",
        "reviewer_id":      DEFAULT_REVIEWER,
        "next_review_date": "",
    }
    form.update(overrides)
    return form


def new_incident_form(employee_id: str = "", today: Optional[date] = None, **overrides: Any) -> dict[str, Any]:
    form = {
        "employee_id":   employee_id,
        "incident_date": _today_iso(today),
        "incident_type": "Other",
        "severity":      "Medium",
        "description":   "",
        "action_taken":  "",
        "status":        "Open",
        "reported_by":    DEFAULT_REVIEWER,
        "witnesses":      "",
        "follow_up_date": "",
    }
    form.update(overrides)
    return form


def new_document_form(employee_id: str = "", **overrides: Any) -> dict[str, Any]:
    form = {"employee_id": employee_id, "category": "Other", "description": ""}
    form.update(overrides)
    return form
