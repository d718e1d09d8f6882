"""
Service eligibility helpers.

Technician records reach the console with their assigned services in one of
three encodings, depending on which backend version produced them:

- ``services``: a list of ``{"id": ...}`` objects (or bare ids)
- ``serviceIds``: a list of ids
- ``serviceIds``: a comma separated string, e.g. ``"1,2,3"``

Everything downstream works on the canonical form, a set of integer ids.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from salon_admin.core.errors import MalformedRecord
from salon_admin.schemas.service import Service, DEFAULT_CATEGORY

logger = logging.getLogger(__name__)


def parse_service_id(value: Any) -> int:
    """Coerce one raw id to int, raising MalformedRecord when it is not one."""
    if isinstance(value, bool):
        raise MalformedRecord(f"Not a service id: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedRecord(f"Not a service id: {value!r}")


def coerce_service_ids(values: Iterable[Any]) -> List[int]:
    """Coerce raw ids in order, dropping duplicates and anything unparseable."""
    ids: List[int] = []
    for value in values:
        try:
            service_id = parse_service_id(value)
        except MalformedRecord as e:
            logger.debug(f"Dropping service id: {e}")
            continue
        if service_id not in ids:
            ids.append(service_id)
    return ids


def ids_from_service_objects(services: Iterable[Any]) -> List[Any]:
    return [
        entry.get("id") if isinstance(entry, Mapping) else entry
        for entry in services
    ]


def normalize_eligibility(technician: Optional[Mapping[str, Any]]) -> Set[int]:
    """
    Return the set of service ids a technician may perform.

    Precedence is fixed: the ``services`` list wins over a ``serviceIds`` list,
    which wins over a ``serviceIds`` string. Malformed entries are dropped.
    """
    if not technician:
        return set()

    services = technician.get("services")
    if isinstance(services, (list, tuple)):
        raw = [x for x in ids_from_service_objects(services) if x is not None]
        return set(coerce_service_ids(raw))

    service_ids = technician.get("serviceIds")
    if isinstance(service_ids, (list, tuple)):
        return set(coerce_service_ids(x for x in service_ids if x))

    if isinstance(service_ids, str):
        parts = (part.strip() for part in service_ids.split(","))
        return set(coerce_service_ids(part for part in parts if part))

    return set()


def filter_and_group(
    catalog: Iterable[Service],
    eligible: Optional[Set[int]]
) -> Dict[str, List[Service]]:
    """
    Group the services a technician can perform by category.

    ``eligible=None`` means no technician is selected and the whole catalog
    passes. An empty set yields an empty mapping.
    """
    grouped: Dict[str, List[Service]] = {}
    for service in catalog:
        if eligible is not None and service.id not in eligible:
            continue
        grouped.setdefault(service.category or DEFAULT_CATEGORY, []).append(service)
    return grouped


def service_separation(
    technician: Optional[Mapping[str, Any]],
    catalog: List[Service]
) -> Tuple[Dict[str, List[Service]], List[Service]]:
    """Split the catalog into what a technician offers (by category) and what they don't."""
    offered_ids = normalize_eligibility(technician)
    offered_by_category = filter_and_group(catalog, offered_ids)
    not_offered = [s for s in catalog if s.id not in offered_ids]
    return offered_by_category, not_offered


def find_technician(
    nail_techs: Iterable[Mapping[str, Any]],
    tech_id: Optional[int]
) -> Optional[Mapping[str, Any]]:
    if tech_id is None:
        return None
    for tech in nail_techs:
        if str(tech.get("id")) == str(tech_id):
            return tech
    return None
