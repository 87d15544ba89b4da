# hrdesk/store.py

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Mapping, Optional, TypeVar

from hrdesk.errors import StorageError
from hrdesk.schema import (
    COLLECTION_KEYS,
    DOCUMENTS_KEY,
    EMPLOYEES_KEY,
    INCIDENTS_KEY,
    RECORD_TYPES,
    REVIEWS_KEY,
    Document,
    DocumentFields,
    Employee,
    EmployeeFields,
    Incident,
    IncidentFields,
    Record,
    Review,
    ReviewFields,
    split_records,
    serialize_records,
)
from hrdesk.storage.base import PersistentStore

logger = logging.getLogger(__name__)

UNKNOWN_EMPLOYEE = "Unknown Employee"

Listener = Callable[[str, tuple], None]
F = TypeVar("F", bound=Record)


class TimestampIds:
    """
    Millisecond-clock identifiers ("1718000000123").
    A reading that repeats or goes backwards is bumped past the last issued
    id, so ids stay unique and increasing for the life of the generator.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        now = int(self._clock() * 1000)
        if now <= self._last:
            now = self._last + 1
        self._last = now
        return str(now)


@dataclass(frozen=True)
class EmployeeRecords:
    reviews:   tuple[Review, ...]
    documents: tuple[Document, ...]
    incidents: tuple[Incident, ...]


def _coerce(model: type[F], fields: F | Mapping[str, Any]) -> F:
    if isinstance(fields, model):
        return fields
    if isinstance(fields, Record):
        fields = fields.model_dump()
    return model.model_validate(fields)


class HRStore:
    """
    Owner of the four collections (employees, reviews, documents, incidents).

    Every mutation writes each collection it touched back to `storage`, one
    save per collection, then tells subscribers. Reviews, documents and
    incidents are append-only; deleting an employee removes their records
    from all three.
    """

    def __init__(
        self,
        storage: PersistentStore,
        *,
        id_factory: Optional[Callable[[], str]] = None,
        today: Optional[Callable[[], date]] = None,
        strict_persistence: bool = False,
    ):
        self.storage = storage
        self.strict_persistence = strict_persistence
        self._new_id = id_factory or TimestampIds()
        self._today = today or date.today
        self._collections: dict[str, list[Any]] = {key: [] for key in COLLECTION_KEYS}
        # Stored entries that failed validation; written back untouched on every save
        self._set_aside: dict[str, list[Any]] = {key: [] for key in COLLECTION_KEYS}
        self._listeners: list[Listener] = []
        self._ready = False
        self._disposed = False

    # ── Lifecycle ──

    def init(self) -> "HRStore":
        """
        Hydrate every collection from storage. Missing or unparseable data
        loads as empty; entries that fail validation are set aside and kept.
        """
        if self._disposed:
            raise RuntimeError("HRStore has been disposed")
        for key in COLLECTION_KEYS:
            try:
                raw = self.storage.load(key)
            except StorageError as e:
                logger.error("Could not load %s, starting empty: %s", key, e)
                raw = None
            self._collections[key], self._set_aside[key] = split_records(RECORD_TYPES[key], raw or [], key)
        self._ready = True
        logger.info(
            "HR store ready (%s): %d employees, %d reviews, %d documents, %d incidents",
            self.storage.name, *(len(self._collections[k]) for k in COLLECTION_KEYS),
        )
        return self

    def dispose(self) -> None:
        if self._disposed:
            return
        self._listeners.clear()
        self._ready = False
        self._disposed = True
        self.storage.close()
        logger.info("HR store disposed")

    def __enter__(self) -> "HRStore":
        if not self._ready:
            self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(key, records)` after each collection change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Read access ──

    @property
    def employees(self) -> tuple[Employee, ...]:
        return tuple(self._collections[EMPLOYEES_KEY])

    @property
    def reviews(self) -> tuple[Review, ...]:
        return tuple(self._collections[REVIEWS_KEY])

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._collections[DOCUMENTS_KEY])

    @property
    def incidents(self) -> tuple[Incident, ...]:
        return tuple(self._collections[INCIDENTS_KEY])

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        for employee in self._collections[EMPLOYEES_KEY]:
            if employee.id == employee_id:
                return employee
        return None

    def find_employee_name(self, employee_id: str) -> str:
        employee = self.get_employee(employee_id)
        return employee.full_name if employee else UNKNOWN_EMPLOYEE

    def filter_employees(self, search_term: str = "") -> list[Employee]:
        needle = (search_term or "").lower()
        return [
            e for e in self._collections[EMPLOYEES_KEY]
            if needle in f"{e.first_name} {e.last_name} {e.position} {e.department}".lower()
        ]

    def records_for_employee(self, employee_id: str) -> EmployeeRecords:
        return EmployeeRecords(
            reviews=tuple(r for r in self._collections[REVIEWS_KEY] if r.employee_id == employee_id),
            documents=tuple(d for d in self._collections[DOCUMENTS_KEY] if d.employee_id == employee_id),
            incidents=tuple(i for i in self._collections[INCIDENTS_KEY] if i.employee_id == employee_id),
        )

    # ── Employees ──

    def add_employee(self, fields: EmployeeFields | Mapping[str, Any]) -> Employee:
        fields = _coerce(EmployeeFields, fields)
        employee = Employee.model_validate({**fields.model_dump(), "id": self._new_id()})
        self._append(EMPLOYEES_KEY, employee)
        return employee

    def update_employee(self, employee: Employee | Mapping[str, Any]) -> bool:
        """Replace the employee with the same id. Unknown ids change nothing."""
        self._require_ready()
        employee = _coerce(Employee, employee)
        current = self._collections[EMPLOYEES_KEY]
        for index, existing in enumerate(current):
            if existing.id == employee.id:
                updated = list(current)
                updated[index] = employee
                self._commit({EMPLOYEES_KEY: updated})
                logger.debug("Updated employee %s", employee.id)
                return True
        logger.debug("Update ignored, no employee %s", employee.id)
        return False

    def delete_employee(self, employee_id: str) -> bool:
        """
        Remove an employee along with every review, document and incident
        that references them. All four collections are replaced in memory
        and written before any subscriber hears about the change.
        """
        self._require_ready()
        existed = self.get_employee(employee_id) is not None

        changes = {}
        for key in COLLECTION_KEYS:
            if key == EMPLOYEES_KEY:
                changes[key] = [e for e in self._collections[key] if e.id != employee_id]
            else:
                changes[key] = [r for r in self._collections[key] if r.employee_id != employee_id]
        removed = {key: len(self._collections[key]) - len(changes[key]) for key in COLLECTION_KEYS}

        self._commit(changes, drop_set_aside=employee_id)
        if existed:
            logger.debug(
                "Deleted employee %s (cascade: %d reviews, %d documents, %d incidents)",
                employee_id, removed[REVIEWS_KEY], removed[DOCUMENTS_KEY], removed[INCIDENTS_KEY],
            )
        return existed

    # ── Append-only logs ──

    def add_review(self, fields: ReviewFields | Mapping[str, Any]) -> Review:
        fields = _coerce(ReviewFields, fields)
        review = Review.model_validate({**fields.model_dump(), "id": self._new_id()})
        self._append(REVIEWS_KEY, review)
        return review

    def add_document(self, fields: DocumentFields | Mapping[str, Any]) -> Document:
        fields = _coerce(DocumentFields, fields)
        document = Document.model_validate({
            **fields.model_dump(),
            "id": self._new_id(),
            "upload_date": self._today().isoformat(),
        })
        self._append(DOCUMENTS_KEY, document)
        return document

    def add_incident(self, fields: IncidentFields | Mapping[str, Any]) -> Incident:
        fields = _coerce(IncidentFields, fields)
        incident = Incident.model_validate({**fields.model_dump(), "id": self._new_id()})
        self._append(INCIDENTS_KEY, incident)
        return incident

    # ── Internals ──

    def _require_ready(self) -> None:
        # Writing before hydration would overwrite stored data with empty lists
        if not self._ready:
            raise RuntimeError("HRStore.init() must be called before making changes")

    def _append(self, key: str, record: Record) -> None:
        self._require_ready()
        self._commit({key: [*self._collections[key], record]})
        logger.debug("Added %s %s", type(record).__name__.lower(), getattr(record, "id", ""))

    def _payload(self, key: str) -> list[Any]:
        return serialize_records(self._collections[key]) + self._set_aside[key]

    def _commit(self, changes: dict[str, list[Any]], drop_set_aside: Optional[str] = None) -> None:
        """
        Swap in the new lists, save each changed collection once, then notify.

        A failed save is logged and memory keeps the change. Under strict
        persistence the change is undone instead: memory goes back to the
        previous lists, collections already written are rewritten with them,
        and the StorageError is raised.
        """
        previous = {key: self._collections[key] for key in changes}
        previous_aside = {key: self._set_aside[key] for key in changes}
        for key, records in changes.items():
            self._collections[key] = records
            if drop_set_aside is not None:
                # Cascade reaches entries that could not be loaded as records too
                field = "id" if key == EMPLOYEES_KEY else "employeeId"
                self._set_aside[key] = [
                    item for item in self._set_aside[key]
                    if not (isinstance(item, dict) and item.get(field) == drop_set_aside)
                ]

        written = []
        for key in changes:
            try:
                self.storage.save(key, self._payload(key))
            except StorageError:
                if not self.strict_persistence:
                    logger.exception("Could not save %s; changes are kept in memory only", key)
                    continue
                self._collections.update(previous)
                self._set_aside.update(previous_aside)
                self._restore(written)
                raise
            written.append(key)

        for key in changes:
            snapshot = tuple(self._collections[key])
            for listener in list(self._listeners):
                listener(key, snapshot)

    def _restore(self, keys: list[str]) -> None:
        for key in keys:
            try:
                self.storage.save(key, self._payload(key))
            except StorageError:
                logger.exception("Could not roll back %s; storage may disagree with memory", key)
