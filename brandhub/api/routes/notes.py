"""
Notes API Routes - company-private notes about brands.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from brandhub.api.schemas.notes import CreateNoteRequest
from brandhub.auth.dependencies import get_current_principal
from brandhub.auth.principal import Principal
from brandhub.database.session import get_db_session
from brandhub.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("")
async def list_notes(
    brand_id: str = Query(..., description="Brand the notes are about"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    return {"notes": NoteService(db).list_for_brand(principal, brand_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    body: CreateNoteRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    note = NoteService(db).create(principal, body.brand_id, body.content)
    db.commit()
    return {"note": note}


@router.delete("/{note_id}")
async def delete_note(
    note_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """Delete a note; allowed for its author or the company's MASTER."""
    NoteService(db).delete(principal, note_id)
    db.commit()
    return {"success": True}
