"""
Note service for company-private annotations on brands.

A note belongs to the annotating company. Only that company's members
can list notes, and only the author or the company's MASTER can delete.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from brandhub.auth.principal import Principal
from brandhub.errors import AuthorizationError, NotFoundError, ValidationError
from brandhub.models.brand import Brand
from brandhub.models.note import Note

logger = logging.getLogger(__name__)


def note_to_dict(note: Note) -> dict:
    return {
        "id": note.id,
        "content": note.content,
        "brand_id": note.brand_id,
        "author": {
            "id": note.author.id,
            "first_name": note.author.first_name,
            "last_name": note.author.last_name,
        },
        "created_at": note.created_at.isoformat() if note.created_at else None,
    }


class NoteService:

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        principal: Principal,
        brand_id: Optional[str],
        content: Optional[str],
    ) -> dict:
        """
        Attach a note to a brand for the principal's company.

        Raises:
            ValidationError: Missing brand id or content
            NotFoundError: Unknown brand
        """
        if not brand_id or not content or not content.strip():
            raise ValidationError("Brand ID and content are required")

        brand = self.session.query(Brand).filter(Brand.id == brand_id).first()
        if not brand:
            raise NotFoundError("Brand not found")

        note = Note(
            content=content.strip(),
            brand_id=brand.id,
            company_id=principal.company_id,
            author_id=principal.user_id,
        )
        self.session.add(note)
        self.session.flush()

        logger.info(
            "Note created",
            extra={"note_id": note.id, "brand_id": brand.id, "user_id": principal.user_id},
        )
        return note_to_dict(note)

    def list_for_brand(self, principal: Principal, brand_id: Optional[str]) -> List[dict]:
        """The principal's company notes on a brand, newest first."""
        if not brand_id:
            raise ValidationError("Brand ID is required")

        notes = (
            self.session.query(Note)
            .filter(
                Note.brand_id == brand_id,
                Note.company_id == principal.company_id,
            )
            .order_by(Note.created_at.desc())
            .all()
        )
        return [note_to_dict(n) for n in notes]

    def delete(self, principal: Principal, note_id: Optional[str]) -> None:
        """
        Delete a note.

        Raises:
            ValidationError: Missing note id
            NotFoundError: Unknown note, or a note of another company
            AuthorizationError: Caller is neither the author nor the MASTER
        """
        if not note_id:
            raise ValidationError("Note ID is required")

        note = (
            self.session.query(Note)
            .filter(
                Note.id == note_id,
                Note.company_id == principal.company_id,
            )
            .first()
        )
        if not note:
            raise NotFoundError("Note not found")

        if note.author_id != principal.user_id and not principal.is_master:
            raise AuthorizationError("Not authorized to delete this note")

        self.session.delete(note)
        self.session.flush()

        logger.info(
            "Note deleted",
            extra={"note_id": note_id, "user_id": principal.user_id},
        )
