# hrdesk/schema.py
#
# Record shapes for the four collections:
#   - Employee (with nested emergency contact)
#   - Review (with nested five-dimension performance scores)
#   - Document (file content carried as a data URL)
#   - Incident
#
# Persisted JSON keeps the camelCase names the records have always been
# stored under; Python code uses snake_case attributes.

import logging
from typing import Any, Iterable, Literal, TypeVar, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# ── Fixed storage keys, one per collection ──
EMPLOYEES_KEY = "hr-employees"
REVIEWS_KEY   = "hr-reviews"
DOCUMENTS_KEY = "hr-documents"
INCIDENTS_KEY = "hr-incidents"

COLLECTION_KEYS = (EMPLOYEES_KEY, REVIEWS_KEY, DOCUMENTS_KEY, INCIDENTS_KEY)

# ── Enumerations ──
EmployeeStatus   = Literal["Active", "Inactive", "On Leave"]
ReviewType       = Literal["Annual", "Mid-Year", "Probation", "90-Day"]
DocumentCategory = Literal["Medical", "Contract", "Certificate", "Performance", "Personal", "Other"]
IncidentType     = Literal["Disciplinary", "Safety", "Harassment", "Attendance", "Performance", "Other"]
Severity         = Literal["Low", "Medium", "High", "Critical"]
IncidentStatus   = Literal["Open", "In Progress", "Resolved", "Closed"]

EMPLOYEE_STATUSES   = get_args(EmployeeStatus)
REVIEW_TYPES        = get_args(ReviewType)
DOCUMENT_CATEGORIES = get_args(DocumentCategory)
INCIDENT_TYPES      = get_args(IncidentType)
SEVERITIES          = get_args(Severity)
INCIDENT_STATUSES   = get_args(IncidentStatus)


class Record(BaseModel):
    # Older stored records may hold numbers where text is expected (e.g. salary)
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, coerce_numbers_to_str=True,
    )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ── Employees ──

class EmergencyContact(Record):
    name:         str = ""
    phone:        str = ""
    relationship: str = ""


class EmployeeFields(Record):
    first_name: str = Field(min_length=1)
    last_name:  str = Field(min_length=1)
    email:      str = ""
    phone:      str = ""
    position:   str = ""
    department: str = ""
    start_date: str = ""
    salary:     str = ""   # kept exactly as entered
    status:     EmployeeStatus = "Active"
    emergency_contact: EmergencyContact = Field(default_factory=EmergencyContact)


class Employee(EmployeeFields):
    id: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# ── Reviews ──

class PerformanceScores(Record):
    # No range check: ratings outside 1-5 are stored as given
    quality:       int = 3
    productivity:  int = 3
    communication: int = 3
    teamwork:      int = 3
    leadership:    int = 3


class ReviewFields(Record):
    employee_id:    str = Field(min_length=1)
    review_date:    str = Field(min_length=1)
    review_type:    ReviewType = "Annual"
    overall_rating: int = 3
    performance:    PerformanceScores = Field(default_factory=PerformanceScores)
    goals:                 str = ""
    achievements:          str = ""
    areas_for_improvement: str = ""
    comments:              str = ""
    reviewer_id:      str = ""
    next_review_date: str = ""


class Review(ReviewFields):
    id: str


# ── Documents ──

class DocumentFields(Record):
    employee_id: str = Field(min_length=1)
    file_name:   str = Field(min_length=1)
    file_type:   str = ""
    category:    DocumentCategory = "Other"
    description: str = ""
    file_data:   str = ""   # data:<mime>;base64,<payload>


class Document(DocumentFields):
    id:          str
    upload_date: str


# ── Incidents ──

class IncidentFields(Record):
    employee_id:   str = Field(min_length=1)
    incident_date: str = Field(min_length=1)
    incident_type: IncidentType = "Other"
    severity:      Severity = "Medium"
    description:   str = ""
    action_taken:  str = ""
    status:        IncidentStatus = "Open"
    reported_by:    str = ""
    witnesses:      str = ""
    follow_up_date: str = ""


class Incident(IncidentFields):
    id: str


RECORD_TYPES: dict[str, type[Record]] = {
    EMPLOYEES_KEY: Employee,
    REVIEWS_KEY:   Review,
    DOCUMENTS_KEY: Document,
    INCIDENTS_KEY: Incident,
}

R = TypeVar("R", bound=Record)


def split_records(model: type[R], raw: Iterable[Any], key: str = "") -> tuple[list[R], list[Any]]:
    """
    Turn a loaded JSON array into (records, rejected).
    Entries that are not objects or fail validation come back untouched in
    `rejected` so the caller can write them back instead of losing them.
    Missing optional fields take their defaults.
    """
    label = key or model.__name__
    records: list[R] = []
    rejected: list[Any] = []
    for position, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("%s[%d]: not an object, set aside", label, position)
            rejected.append(item)
            continue
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "%s[%d]: invalid record set aside (%d error(s): %s)",
                label, position, e.error_count(), e.errors()[0]["msg"],
            )
            rejected.append(item)
    if rejected:
        logger.warning("  ↳ %s: loaded %d record(s), set aside %d", label, len(records), len(rejected))
    return records, rejected


def normalize_records(model: type[R], raw: Iterable[Any], key: str = "") -> list[R]:
    """Valid records only; see split_records."""
    return split_records(model, raw, key)[0]


def serialize_records(records: Iterable[Record]) -> list[dict[str, Any]]:
    return [r.to_json() for r in records]
