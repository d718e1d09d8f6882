import pytest

from salon_admin.schemas.service import Service
from salon_admin.utils.eligibility import (
    filter_and_group, find_technician, normalize_eligibility, service_separation
)

catalog = [
    Service(id=1, name="Gel Manicure", category="Manicure"),
    Service(id=2, name="Spa Pedicure", category="Pedicure"),
    Service(id=3, name="French Tips", category="Manicure"),
    Service(id=4, name="Paraffin Wax"),
    Service(id=5, name="Nail Art", category=""),
]


@pytest.mark.parametrize("technician", [
    {"services": [{"id": 1}, {"id": 2}]},
    {"services": [1, "2"]},
    {"serviceIds": [1, 2]},
    {"serviceIds": "1,2"},
    {"serviceIds": " 1 , 2 ,, "},
])
def test_every_encoding_yields_the_same_set(technician):
    assert normalize_eligibility(technician) == {1, 2}


def test_missing_technician_has_no_services():
    assert normalize_eligibility(None) == set()
    assert normalize_eligibility({}) == set()
    assert normalize_eligibility({"name": "Linh"}) == set()


def test_object_list_wins_over_id_list():
    tech = {"services": [{"id": 7}], "serviceIds": [1, 2]}
    assert normalize_eligibility(tech) == {7}


def test_id_list_wins_over_comma_string_only_when_list():
    assert normalize_eligibility({"services": None, "serviceIds": [3]}) == {3}
    assert normalize_eligibility({"services": "1,2", "serviceIds": "4"}) == {4}


def test_malformed_entries_are_dropped():
    tech = {"services": [{"id": 1}, {"name": "no id"}, None, {"id": "abc"}, {"id": "3"}]}
    assert normalize_eligibility(tech) == {1, 3}
    assert normalize_eligibility({"serviceIds": [0, None, "", "x", 4]}) == {4}
    assert normalize_eligibility({"serviceIds": "1,two,3"}) == {1, 3}


def test_no_technician_keeps_whole_catalog():
    grouped = filter_and_group(catalog, None)
    assert list(grouped) == ["Manicure", "Pedicure", "Other"]
    assert [s.id for s in grouped["Manicure"]] == [1, 3]
    assert [s.id for s in grouped["Other"]] == [4, 5]
    assert sum(len(v) for v in grouped.values()) == len(catalog)


def test_technician_without_services_gets_empty_mapping():
    assert filter_and_group(catalog, set()) == {}


def test_filter_keeps_catalog_and_category_order():
    grouped = filter_and_group(catalog, {3, 2, 5})
    assert list(grouped) == ["Pedicure", "Manicure", "Other"]
    assert [s.name for s in grouped["Manicure"]] == ["French Tips"]


def test_service_separation():
    offered, not_offered = service_separation({"serviceIds": "1,3"}, catalog)
    assert list(offered) == ["Manicure"]
    assert [s.id for s in not_offered] == [2, 4, 5]


def test_find_technician_compares_ids_as_strings():
    techs = [{"id": 1, "name": "Linh"}, {"id": "2", "name": "Mai"}]
    assert find_technician(techs, 2)["name"] == "Mai"
    assert find_technician(techs, None) is None
    assert find_technician(techs, 9) is None
