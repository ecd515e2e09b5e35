import pytest

from core.access_control import role_rank, parse_role
from core.errors import Unauthorized, ValidationError
from core.time_utils import now_ns
from models.user import UserRole
from services.user_service import get_admins, ensure_admin_principals
from tests.conftest import ADMIN, NURSE, GUEST


class TestRoleOrder:
    def test_roles_are_totally_ordered(self):
        assert role_rank(UserRole.guest) < role_rank(UserRole.user) < role_rank(UserRole.admin)

    def test_parse_role_accepts_strings(self):
        assert parse_role(" Admin ") is UserRole.admin
        assert parse_role(UserRole.user) is UserRole.user

    def test_parse_role_rejects_unknown(self):
        with pytest.raises(ValidationError):
            parse_role("superuser")


class TestCallerRoles:
    def test_unknown_principal_is_guest(self, service):
        assert service.get_caller_user_role("nobody") is UserRole.guest
        assert service.get_caller_user_role("") is UserRole.guest

    def test_bootstrap_admin(self, service):
        assert service.is_caller_admin(ADMIN)
        assert not service.is_caller_admin(NURSE)
        assert service.get_caller_user_role(NURSE) is UserRole.user

    def test_guest_cannot_mutate(self, service):
        with pytest.raises(Unauthorized):
            service.register_patient(GUEST, "A", 1, "male", "1", "x", [])
        assert service.get_all_patients(GUEST) == []

    def test_guest_can_read(self, service, register):
        register()
        assert len(service.get_all_patients(GUEST)) == 1

    def test_only_admin_assigns_roles(self, service):
        with pytest.raises(Unauthorized):
            service.assign_caller_user_role(NURSE, GUEST, "admin")
        with pytest.raises(Unauthorized):
            service.assign_caller_user_role(NURSE, NURSE, "admin")
        assert service.get_caller_user_role(GUEST) is UserRole.guest

        service.assign_caller_user_role(ADMIN, GUEST, "user")
        assert service.get_caller_user_role(GUEST) is UserRole.user

    def test_admin_can_demote(self, service):
        service.assign_caller_user_role(ADMIN, NURSE, UserRole.guest)
        with pytest.raises(Unauthorized):
            service.register_patient(NURSE, "A", 1, "male", "1", "x", [])


class TestProfiles:
    def test_no_profile_by_default(self, service):
        assert service.get_caller_user_profile(NURSE) is None
        assert service.get_caller_user_profile("") is None

    def test_save_and_replace_profile(self, service):
        service.save_caller_user_profile(GUEST, "Dr. Rao", "Doctor")
        profile = service.get_caller_user_profile(GUEST)
        assert (profile.name, profile.profile_role) == ("Dr. Rao", "Doctor")

        service.save_caller_user_profile(GUEST, "Dr. R. Rao", "Consultant")
        profile = service.get_caller_user_profile(GUEST)
        assert (profile.name, profile.profile_role) == ("Dr. R. Rao", "Consultant")

    def test_profile_role_does_not_grant_access(self, service):
        service.save_caller_user_profile(GUEST, "Mallory", "admin")
        assert service.get_caller_user_role(GUEST) is UserRole.guest
        assert not service.is_caller_admin(GUEST)

    def test_saving_profile_keeps_access_role(self, service):
        service.save_caller_user_profile(NURSE, "Nurse Joy", "Nurse")
        assert service.get_caller_user_role(NURSE) is UserRole.user

    def test_anonymous_cannot_save_profile(self, service):
        with pytest.raises(Unauthorized):
            service.save_caller_user_profile("  ", "Nobody", "None")

    def test_get_user_profile_self_or_admin(self, service):
        service.save_caller_user_profile(NURSE, "Nurse Joy", "Nurse")

        assert service.get_user_profile(NURSE, NURSE).name == "Nurse Joy"
        assert service.get_user_profile(ADMIN, NURSE).name == "Nurse Joy"
        with pytest.raises(Unauthorized):
            service.get_user_profile(GUEST, NURSE)


class TestBootstrap:
    def test_admins_listed(self, store, service):
        service.assign_caller_user_role(ADMIN, GUEST, "admin")
        with store.session() as db:
            assert [a.principal for a in get_admins(db)] == sorted([ADMIN, GUEST])

    def test_bootstrap_is_repeatable(self, store):
        with store.writing("user_accounts") as db:
            assert ensure_admin_principals(db, [ADMIN, NURSE], now_ns()) == [NURSE]
        with store.writing("user_accounts") as db:
            assert ensure_admin_principals(db, [ADMIN, NURSE], now_ns()) == []
