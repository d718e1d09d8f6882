import logging
from datetime import date
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Set

from salon_admin.core.errors import (
    DuplicateSubmission, MalformedRecord, MissingRequiredField, NoServiceSelected
)
from salon_admin.schemas.appointment import AppointmentDraft, ValidationResult
from salon_admin.schemas.service import Service
from salon_admin.utils.eligibility import (
    coerce_service_ids, filter_and_group, find_technician,
    ids_from_service_objects, normalize_eligibility, parse_service_id
)

logger = logging.getLogger(__name__)

# A short appointment with many services probably has a wrong end time
SHORT_APPOINTMENT_MINUTES = 60
MAX_SERVICES_FOR_SHORT_APPOINTMENT = 3

REQUIRED_FIELDS = ("clientName", "date", "startTime", "endTime")

CONFIRMATION_MESSAGE = (
    "It looks like several services were selected for a short appointment. "
    "Are you sure the end time is correct?"
)


class FormPhase(str, Enum):
    DRAFT = "draft"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"


def clock_minutes(value: str) -> Optional[int]:
    """Minutes since midnight for an ``HH:MM`` string, None if it isn't one."""
    try:
        hours, minutes = value.split(":")[:2]
        return int(hours) * 60 + int(minutes)
    except (AttributeError, ValueError):
        return None


def diff_minutes(start: str, end: str) -> Optional[int]:
    """
    Naive clock difference between two times of day.

    Not date aware: an end time past midnight gives a negative result.
    """
    start_minutes = clock_minutes(start)
    end_minutes = clock_minutes(end)
    if start_minutes is None or end_minutes is None:
        return None
    return end_minutes - start_minutes


def _first(*values):
    for value in values:
        if value:
            return value
    return None


class AppointmentForm:
    """
    Controller for the create/edit appointment form.

    Holds the draft, keeps the selected services consistent with the selected
    technician, validates, and guards the submit call so a form instance
    is saved at most once.
    """

    def __init__(
        self,
        catalog: List[Service],
        nail_techs: List[Mapping[str, Any]],
        draft: Optional[AppointmentDraft] = None
    ):
        self.catalog = list(catalog)
        self.nail_techs = list(nail_techs)
        self.draft = draft.model_copy(deep=True) if draft else AppointmentDraft()
        self.phase = FormPhase.DRAFT

    @classmethod
    def new(cls, catalog: List[Service], nail_techs: List[Mapping[str, Any]]) -> "AppointmentForm":
        form = cls(catalog, nail_techs)
        form.draft.date = date.today().isoformat()
        return form

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        catalog: List[Service],
        nail_techs: List[Mapping[str, Any]]
    ) -> "AppointmentForm":
        """Hydrate from a stored appointment, nested or flattened."""
        client = record.get("client")
        if not isinstance(client, Mapping):
            client = {}
        nail_tech = record.get("nailTech")

        tech_id = nail_tech.get("id") if isinstance(nail_tech, Mapping) else None
        if tech_id is None:
            tech_id = record.get("nailTechId")
        if tech_id not in (None, ""):
            try:
                tech_id = parse_service_id(tech_id)
            except MalformedRecord as e:
                logger.debug(f"Ignoring stored technician: {e}")
                tech_id = None

        services = record.get("services")
        if isinstance(services, list):
            raw_ids = ids_from_service_objects(services)
        else:
            raw_ids = record.get("serviceIds") or []

        draft = AppointmentDraft(
            clientName=_first(client.get("name"), record.get("clientName")) or "",
            clientEmail=_first(client.get("email"), record.get("clientEmail")) or "",
            clientPhone=_first(client.get("phone"), record.get("clientPhone")) or "",
            date=record.get("date") or "",
            startTime=record.get("startTime") or "",
            endTime=record.get("endTime") or "",
            serviceIds=coerce_service_ids(x for x in raw_ids if x),
        )
        form = cls(catalog, nail_techs, draft)
        form.select_technician(tech_id)
        return form

    def eligible_service_ids(self) -> Optional[Set[int]]:
        """None while no technician is selected."""
        if self.draft.nailTechId is None:
            return None
        tech = find_technician(self.nail_techs, self.draft.nailTechId)
        return normalize_eligibility(tech)

    def available_services(self) -> Dict[str, List[Service]]:
        return filter_and_group(self.catalog, self.eligible_service_ids())

    def select_technician(self, tech_id: Any) -> None:
        """Set the technician and drop selected services they don't offer."""
        if tech_id in (None, ""):
            self.draft.nailTechId = None
            return
        self.draft.nailTechId = int(tech_id)
        eligible = self.eligible_service_ids()
        kept = [sid for sid in self.draft.serviceIds if sid in eligible]
        if len(kept) != len(self.draft.serviceIds):
            logger.debug(
                f"Technician {tech_id} does not offer services "
                f"{sorted(set(self.draft.serviceIds) - set(kept))}; deselected"
            )
        self.draft.serviceIds = kept

    def select_services(self, ids: List[Any]) -> None:
        """Replace the whole selection."""
        selected = coerce_service_ids(ids)
        eligible = self.eligible_service_ids()
        if eligible is not None:
            selected = [sid for sid in selected if sid in eligible]
        self.draft.serviceIds = selected

    def update(self, **fields: str) -> None:
        for name, value in fields.items():
            setattr(self.draft, name, value)

    def selected_service_names(self) -> str:
        selected = set(self.draft.serviceIds)
        return ", ".join(s.name for s in self.catalog if s.id in selected)

    def validate(self) -> ValidationResult:
        missing = [
            name for name in REQUIRED_FIELDS
            if not (getattr(self.draft, name) or "").strip()
        ]
        if missing:
            raise MissingRequiredField(missing)

        if not self.draft.serviceIds:
            raise NoServiceSelected()

        minutes = diff_minutes(self.draft.startTime, self.draft.endTime)
        needs_confirmation = (
            minutes is not None
            and minutes <= SHORT_APPOINTMENT_MINUTES
            and len(self.draft.serviceIds) > MAX_SERVICES_FOR_SHORT_APPOINTMENT
        )
        return ValidationResult(
            durationMinutes=minutes,
            requiresConfirmation=needs_confirmation,
            message=CONFIRMATION_MESSAGE if needs_confirmation else None,
        )

    def serialize(self) -> Dict[str, Any]:
        """The exact body handed to the create/update call."""
        d = self.draft
        return {
            "clientName": d.clientName.strip(),
            "clientEmail": d.clientEmail.strip(),
            "clientPhone": d.clientPhone.strip(),
            "date": d.date,
            "startTime": d.startTime,
            "endTime": d.endTime,
            "nailTechId": int(d.nailTechId) if d.nailTechId is not None else None,
            "serviceIds": [int(sid) for sid in d.serviceIds],
        }

    async def submit(
        self,
        save: Callable[[Dict[str, Any]], Awaitable[Any]],
        confirm: Optional[Callable[[str], bool]] = None
    ) -> Optional[Any]:
        """
        Validate and hand the payload to ``save``.

        Returns None without saving when the user has to confirm a short
        appointment and ``confirm`` is missing or declines. A failed save
        leaves the draft untouched so it can be submitted again.
        """
        if self.phase in (FormPhase.SUBMITTING, FormPhase.SUBMITTED):
            raise DuplicateSubmission(self.phase.value)

        result = self.validate()
        if result.requiresConfirmation and (confirm is None or not confirm(result.message)):
            logger.info("Appointment submission waiting for confirmation")
            return None

        self.phase = FormPhase.SUBMITTING
        try:
            saved = await save(self.serialize())
        except Exception:
            self.phase = FormPhase.FAILED
            raise
        self.phase = FormPhase.SUBMITTED
        return saved
