import pytest

from salon_admin.core.roles import Capabilities, Role, capabilities_for, role_for


def test_admin_can_do_everything():
    assert capabilities_for("admin") == Capabilities(edit=True, viewFinancial=True, viewReport=True)


def test_staff_cannot_see_financials():
    assert capabilities_for("staff") == Capabilities(edit=True, viewFinancial=False, viewReport=True)


@pytest.mark.parametrize("role", ["viewer", None, "", "owner", "ADMIN"])
def test_everyone_else_is_read_only(role):
    assert capabilities_for(role) == Capabilities()


def test_enum_roles_are_accepted():
    assert capabilities_for(Role.STAFF).edit is True


def test_capabilities_are_not_shared():
    caps = capabilities_for("admin")
    caps.edit = False
    assert capabilities_for("admin").edit is True


def test_role_for_defaults_to_viewer():
    assert role_for("staff") == Role.STAFF
    assert role_for(None) == Role.VIEWER
    assert role_for("root") == Role.VIEWER
