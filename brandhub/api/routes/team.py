"""
Team API Routes - list, add and remove company members.

Adding and removing members is reserved for the company's MASTER user.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brandhub.api.schemas.team import AddTeamMemberRequest
from brandhub.auth.dependencies import get_current_principal, require_master
from brandhub.auth.principal import Principal
from brandhub.database.session import get_db_session
from brandhub.services.team_service import TeamService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/team", tags=["team"])


@router.get("")
async def list_team(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    return {"users": TeamService(db).list_members(principal)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_team_member(
    body: AddTeamMemberRequest,
    principal: Principal = Depends(require_master),
    db: Session = Depends(get_db_session),
):
    user = TeamService(db).add_member(
        principal,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    db.commit()
    return {"user": user}


@router.delete("/{user_id}")
async def remove_team_member(
    user_id: str,
    principal: Principal = Depends(require_master),
    db: Session = Depends(get_db_session),
):
    TeamService(db).remove_member(principal, user_id)
    db.commit()
    return {"success": True}
