"""
Tests for team management.

Covers:
- Listing members of the caller's company only
- MASTER-only add/remove
- MASTER users can never be removed
- Cross-company removal is rejected
"""

import pytest

from brandhub.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from brandhub.models.user import User, UserRole
from brandhub.services.team_service import TeamService
from brandhub.tests.factories import (
    create_company,
    create_user,
    master_of,
    master_principal,
    principal_for,
)


@pytest.fixture
def service(db_session):
    return TeamService(db_session)


@pytest.fixture
def company(db_session):
    return create_company(db_session)


class TestListMembers:

    def test_lists_only_own_company(self, db_session, service, company):
        member = create_user(db_session, company)
        create_company(db_session)

        users = service.list_members(principal_for(member))

        assert {u["id"] for u in users} == {master_of(company).id, member.id}
        assert "password_hash" not in users[0]


class TestAddMember:

    def test_master_adds_user(self, db_session, service, company):
        user = service.add_member(
            master_principal(company), "New.Person@Example.com", "s3cret", "New", "Person"
        )

        assert user["email"] == "new.person@example.com"
        assert user["role"] == "USER"
        stored = db_session.query(User).filter(User.id == user["id"]).first()
        assert stored.company_id == company.id
        assert stored.password_hash != "s3cret"

    def test_non_master_cannot_add(self, db_session, service, company):
        member = create_user(db_session, company)

        with pytest.raises(AuthorizationError, match="Only the master user"):
            service.add_member(principal_for(member), "x@example.com", "pw", "X", "Y")

    def test_missing_fields(self, service, company):
        with pytest.raises(ValidationError, match="All fields are required"):
            service.add_member(master_principal(company), "x@example.com", None, "X", "Y")

    def test_duplicate_email_conflicts(self, db_session, service, company):
        other = create_company(db_session)
        existing = master_of(other)

        with pytest.raises(ConflictError, match="already exists"):
            service.add_member(
                master_principal(company), existing.email.upper(), "pw", "X", "Y"
            )


class TestRemoveMember:

    def test_master_removes_user(self, db_session, service, company):
        member = create_user(db_session, company)

        service.remove_member(master_principal(company), member.id)

        assert db_session.query(User).filter(User.id == member.id).first() is None

    def test_non_master_cannot_remove(self, db_session, service, company):
        member = create_user(db_session, company)
        other_member = create_user(db_session, company)

        with pytest.raises(AuthorizationError):
            service.remove_member(principal_for(member), other_member.id)

    def test_cannot_remove_self(self, service, company):
        principal = master_principal(company)

        with pytest.raises(ValidationError, match="Cannot delete yourself"):
            service.remove_member(principal, principal.user_id)

    def test_cannot_remove_master(self, db_session, service, company):
        """A second MASTER in the same company is still protected."""
        second_master = create_user(db_session, company, role=UserRole.MASTER)

        with pytest.raises(AuthorizationError, match="Cannot delete the master user"):
            service.remove_member(master_principal(company), second_master.id)

    def test_cannot_remove_user_of_other_company(self, db_session, service, company):
        other = create_company(db_session)
        outsider = create_user(db_session, other)

        with pytest.raises(AuthorizationError, match="other companies"):
            service.remove_member(master_principal(company), outsider.id)

        assert db_session.query(User).filter(User.id == outsider.id).first() is not None

    def test_unknown_user(self, service, company):
        with pytest.raises(NotFoundError, match="User not found"):
            service.remove_member(master_principal(company), "no-such-user")
