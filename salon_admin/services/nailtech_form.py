import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from salon_admin.core.errors import MalformedRecord, MissingRequiredField
from salon_admin.schemas.nailtech import NailTechDraft, WEEKDAYS
from salon_admin.schemas.service import Service
from salon_admin.utils.eligibility import (
    coerce_service_ids, filter_and_group, ids_from_service_objects
)

logger = logging.getLogger(__name__)


def decode_availability(raw: Any) -> List[str]:
    """Decode an ``availabilityJson`` value, raising MalformedRecord on bad data."""
    if not raw:
        return []
    try:
        days = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedRecord(f"availabilityJson is not JSON: {e}")
    if not isinstance(days, list):
        raise MalformedRecord("availabilityJson is not a list")
    decoded: List[str] = []
    for day in days:
        if isinstance(day, str) and day not in decoded:
            decoded.append(day)
    return decoded


def parse_availability(raw: Any) -> List[str]:
    """Like decode_availability but never fails: bad data means no days."""
    try:
        return decode_availability(raw)
    except MalformedRecord as e:
        logger.debug(f"Ignoring availability: {e}")
        return []


def order_days(days) -> List[str]:
    """Canonical Monday..Sunday order; unknown names go last in their given order."""
    known = [d for d in WEEKDAYS if d in days]
    return known + [d for d in days if d not in WEEKDAYS]


class NailTechForm:
    """Controller for the add/edit technician form."""

    def __init__(self, catalog: List[Service], draft: Optional[NailTechDraft] = None):
        self.catalog = list(catalog)
        self.draft = draft.model_copy(deep=True) if draft else NailTechDraft()

    @classmethod
    def from_record(cls, record: Mapping[str, Any], catalog: List[Service]) -> "NailTechForm":
        """
        Hydrate from a stored technician.

        Service ids are the union of the ``services`` objects and the
        ``serviceIds`` list, unlike normalize_eligibility which picks one.
        """
        services = record.get("services")
        from_services = (
            [x for x in ids_from_service_objects(services) if x]
            if isinstance(services, list) else []
        )
        service_ids = record.get("serviceIds")
        from_service_ids = service_ids if isinstance(service_ids, list) else []

        draft = NailTechDraft(
            name=record.get("name") or "",
            email=record.get("email") or "",
            phone=record.get("phone") or "",
            availableDays=parse_availability(record.get("availabilityJson")),
            serviceIds=coerce_service_ids(from_services + from_service_ids),
        )
        return cls(catalog, draft)

    def categories(self) -> Dict[str, List[Service]]:
        return filter_and_group(self.catalog, None)

    def is_category_selected(self, category: str) -> bool:
        ids = [s.id for s in self.categories().get(category, [])]
        return bool(ids) and all(sid in self.draft.serviceIds for sid in ids)

    def fully_selected_categories(self) -> List[str]:
        return [cat for cat in self.categories() if self.is_category_selected(cat)]

    def toggle_service(self, service_id: int) -> None:
        service_id = int(service_id)
        if service_id in self.draft.serviceIds:
            self.draft.serviceIds = [sid for sid in self.draft.serviceIds if sid != service_id]
        else:
            self.draft.serviceIds = self.draft.serviceIds + [service_id]

    def toggle_category(self, category: str) -> None:
        """Clear the category if all of it is selected, otherwise select all of it."""
        ids = [s.id for s in self.categories().get(category, [])]
        if self.is_category_selected(category):
            self.draft.serviceIds = [sid for sid in self.draft.serviceIds if sid not in ids]
        else:
            self.draft.serviceIds = self.draft.serviceIds + [
                sid for sid in ids if sid not in self.draft.serviceIds
            ]

    def toggle_day(self, day: str) -> None:
        if day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {day}")
        if day in self.draft.availableDays:
            self.draft.availableDays = [d for d in self.draft.availableDays if d != day]
        else:
            self.draft.availableDays = self.draft.availableDays + [day]

    def display_days(self) -> List[str]:
        return order_days(self.draft.availableDays)

    def serialize(self) -> Dict[str, Any]:
        name = (self.draft.name or "").strip()
        if not name:
            raise MissingRequiredField(["name"])

        service_ids = [int(sid) for sid in self.draft.serviceIds]
        return {
            "name": name,
            "email": (self.draft.email or "").strip(),
            "phone": (self.draft.phone or "").strip(),
            "availabilityJson": json.dumps(self.display_days()),
            # both encodings, see normalize_eligibility
            "serviceIds": service_ids,
            "services": [{"id": sid} for sid in service_ids],
        }
