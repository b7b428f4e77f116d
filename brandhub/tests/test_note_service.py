"""
Tests for company-private brand notes.

Notes belong to the annotating company: other companies, including the
brand owner, never see them.
"""

import pytest

from brandhub.errors import AuthorizationError, NotFoundError, ValidationError
from brandhub.models.access_request import AccessRequestStatus
from brandhub.services.brand_service import BrandService
from brandhub.services.note_service import NoteService
from brandhub.tests.factories import (
    create_access_request,
    create_company,
    create_user,
    master_principal,
    principal_for,
)


@pytest.fixture
def service(db_session):
    return NoteService(db_session)


@pytest.fixture
def owner(db_session):
    return create_company(db_session, name="Owner Co")


@pytest.fixture
def annotator(db_session):
    return create_company(db_session, name="Annotator Co")


class TestCreateNote:

    def test_creates_note_with_author(self, service, owner, annotator):
        note = service.create(master_principal(annotator), owner.brand.id, "  Great fit  ")

        assert note["content"] == "Great fit"
        assert note["brand_id"] == owner.brand.id
        assert note["author"]["first_name"] == "Test"

    def test_missing_content(self, service, owner, annotator):
        with pytest.raises(ValidationError, match="Brand ID and content are required"):
            service.create(master_principal(annotator), owner.brand.id, "   ")

    def test_unknown_brand(self, service, annotator):
        with pytest.raises(NotFoundError, match="Brand not found"):
            service.create(master_principal(annotator), "no-such-brand", "hello")


class TestNotePrivacy:

    def test_colleagues_see_company_notes(self, db_session, service, owner, annotator):
        colleague = create_user(db_session, annotator)
        service.create(master_principal(annotator), owner.brand.id, "note")

        notes = service.list_for_brand(principal_for(colleague), owner.brand.id)

        assert [n["content"] for n in notes] == ["note"]

    def test_brand_owner_never_sees_notes(self, service, owner, annotator):
        service.create(master_principal(annotator), owner.brand.id, "private")

        assert service.list_for_brand(master_principal(owner), owner.brand.id) == []

    def test_detail_view_carries_notes_for_full_viewers(
        self, db_session, service, owner, annotator
    ):
        create_access_request(db_session, annotator, owner.brand, AccessRequestStatus.APPROVED)
        service.create(master_principal(annotator), owner.brand.id, "approved partner")

        view = BrandService(db_session).get_brand_detail(
            master_principal(annotator), owner.brand.id
        )

        assert [n["content"] for n in view["notes"]] == ["approved partner"]

    def test_limited_detail_view_has_no_notes(self, service, db_session, owner, annotator):
        service.create(master_principal(annotator), owner.brand.id, "hidden")

        view = BrandService(db_session).get_brand_detail(
            master_principal(annotator), owner.brand.id
        )

        assert "notes" not in view


class TestDeleteNote:

    def test_author_deletes(self, db_session, service, owner, annotator):
        author = create_user(db_session, annotator)
        note = service.create(principal_for(author), owner.brand.id, "mine")

        service.delete(principal_for(author), note["id"])

        assert service.list_for_brand(principal_for(author), owner.brand.id) == []

    def test_master_deletes_colleague_note(self, db_session, service, owner, annotator):
        author = create_user(db_session, annotator)
        note = service.create(principal_for(author), owner.brand.id, "theirs")

        service.delete(master_principal(annotator), note["id"])

        assert service.list_for_brand(principal_for(author), owner.brand.id) == []

    def test_other_member_cannot_delete(self, db_session, service, owner, annotator):
        author = create_user(db_session, annotator)
        other = create_user(db_session, annotator)
        note = service.create(principal_for(author), owner.brand.id, "theirs")

        with pytest.raises(AuthorizationError):
            service.delete(principal_for(other), note["id"])

    def test_other_company_sees_not_found(self, service, owner, annotator):
        note = service.create(master_principal(annotator), owner.brand.id, "private")

        with pytest.raises(NotFoundError, match="Note not found"):
            service.delete(master_principal(owner), note["id"])
