import json

import pytest

from salon_admin.core.errors import MalformedRecord, MissingRequiredField
from salon_admin.schemas.nailtech import NailTechDraft
from salon_admin.schemas.service import Service
from salon_admin.services.nailtech_form import (
    NailTechForm, decode_availability, order_days, parse_availability
)

catalog = [
    Service(id=1, name="Gel Manicure", category="Manicure"),
    Service(id=2, name="Classic Manicure", category="Manicure"),
    Service(id=3, name="French Tips", category="Manicure"),
    Service(id=5, name="Spa Pedicure", category="Pedicure"),
]


def test_toggle_service():
    form = NailTechForm(catalog)
    form.toggle_service(1)
    form.toggle_service(5)
    assert form.draft.serviceIds == [1, 5]
    form.toggle_service(1)
    assert form.draft.serviceIds == [5]


def test_toggle_category_fills_partial_then_clears():
    form = NailTechForm(catalog, NailTechDraft(name="Linh", serviceIds=[1, 3, 5]))
    assert not form.is_category_selected("Manicure")

    form.toggle_category("Manicure")
    assert sorted(form.draft.serviceIds) == [1, 2, 3, 5]
    assert form.fully_selected_categories() == ["Manicure", "Pedicure"]

    form.toggle_category("Manicure")
    assert form.draft.serviceIds == [5]


def test_toggle_unknown_category_is_a_no_op():
    form = NailTechForm(catalog, NailTechDraft(serviceIds=[1]))
    form.toggle_category("Waxing")
    assert form.draft.serviceIds == [1]


def test_toggle_day_and_display_order():
    form = NailTechForm(catalog)
    for day in ["Sunday", "Monday", "Wednesday"]:
        form.toggle_day(day)
    form.toggle_day("Sunday")
    assert form.draft.availableDays == ["Monday", "Wednesday"]

    form.toggle_day("Tuesday")
    assert form.display_days() == ["Monday", "Tuesday", "Wednesday"]

    with pytest.raises(ValueError):
        form.toggle_day("Funday")


def test_serialize_sends_both_service_encodings():
    form = NailTechForm(catalog, NailTechDraft(
        name="  Linh ", email=" linh@example.com", phone="555-0100 ",
        availableDays=["Wednesday", "Monday"], serviceIds=[3, 1],
    ))
    assert form.serialize() == {
        "name": "Linh",
        "email": "linh@example.com",
        "phone": "555-0100",
        "availabilityJson": json.dumps(["Monday", "Wednesday"]),
        "serviceIds": [3, 1],
        "services": [{"id": 3}, {"id": 1}],
    }


def test_serialize_requires_a_name():
    form = NailTechForm(catalog, NailTechDraft(name="   "))
    with pytest.raises(MissingRequiredField) as exc:
        form.serialize()
    assert exc.value.fields == ["name"]


def test_availability_round_trip():
    form = NailTechForm(catalog, NailTechDraft(name="Linh", availableDays=["Monday", "Wednesday"]))
    record = {"id": 1, **form.serialize()}

    hydrated = NailTechForm.from_record(record, catalog)
    assert set(hydrated.draft.availableDays) == {"Monday", "Wednesday"}


@pytest.mark.parametrize("raw", [None, "", "not json", "{\"Monday\": true}", "42", 17])
def test_bad_availability_means_no_days(raw):
    assert parse_availability(raw) == []


def test_decode_availability_reports_malformed_data():
    with pytest.raises(MalformedRecord):
        decode_availability("[Monday")
    assert decode_availability("[\"Friday\", 3, \"Friday\"]") == ["Friday"]


def test_hydration_merges_both_service_paths():
    record = {
        "name": "Mai",
        "availabilityJson": "oops",
        "services": [{"id": 1}, {"id": None}, {"id": 2}],
        "serviceIds": [2, 5],
    }
    form = NailTechForm.from_record(record, catalog)
    assert form.draft.serviceIds == [1, 2, 5]
    assert form.draft.availableDays == []
    assert form.draft.email == ""


def test_hydration_ignores_comma_string():
    form = NailTechForm.from_record({"name": "Thao", "serviceIds": "1,2"}, catalog)
    assert form.draft.serviceIds == []


def test_order_days_puts_unknown_names_last():
    assert order_days(["Holiday", "Friday", "Monday"]) == ["Monday", "Friday", "Holiday"]
