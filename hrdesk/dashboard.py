# hrdesk/dashboard.py

from dataclasses import dataclass
from datetime import date
from typing import Optional

from hrdesk.store import HRStore

OPEN_INCIDENT_STATUSES = {"Open", "In Progress"}
HIGH_PRIORITY_SEVERITIES = {"High", "Critical"}

RECENT_REVIEWS = 3
RECENT_INCIDENTS = 2


@dataclass(frozen=True)
class DashboardSummary:
    total_employees:         int
    active_employees:        int
    total_reviews:           int
    reviews_this_year:       int
    total_documents:         int
    medical_documents:       int
    open_incidents:          int
    high_priority_incidents: int


@dataclass(frozen=True)
class Activity:
    kind:          str   # "review" / "incident"
    title:         str
    employee_name: str
    date:          str
    severity:      Optional[str] = None


def _year_of(iso_date: str) -> Optional[int]:
    try:
        return date.fromisoformat(iso_date[:10]).year
    except ValueError:
        return None


def summarize(store: HRStore, today: Optional[date] = None) -> DashboardSummary:
    year = (today or date.today()).year
    employees = store.employees
    reviews = store.reviews
    documents = store.documents
    incidents = store.incidents

    return DashboardSummary(
        total_employees=len(employees),
        active_employees=sum(1 for e in employees if e.status == "Active"),
        total_reviews=len(reviews),
        reviews_this_year=sum(1 for r in reviews if _year_of(r.review_date) == year),
        total_documents=len(documents),
        medical_documents=sum(1 for d in documents if d.category == "Medical"),
        open_incidents=sum(1 for i in incidents if i.status in OPEN_INCIDENT_STATUSES),
        # Counted regardless of status
        high_priority_incidents=sum(1 for i in incidents if i.severity in HIGH_PRIORITY_SEVERITIES),
    )


def recent_activity(store: HRStore) -> list[Activity]:
    """First few reviews, then first few incidents, in stored order."""
    feed = [
        Activity(
            kind="review",
            title="Performance review completed",
            employee_name=store.find_employee_name(r.employee_id),
            date=r.review_date,
        )
        for r in store.reviews[:RECENT_REVIEWS]
    ]
    feed += [
        Activity(
            kind="incident",
            title="New incident reported",
            employee_name=store.find_employee_name(i.employee_id),
            date=i.incident_date,
            severity=i.severity,
        )
        for i in store.incidents[:RECENT_INCIDENTS]
    ]
    return feed
