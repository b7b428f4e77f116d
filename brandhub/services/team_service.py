"""
Team service: company membership managed by the MASTER user.

Rules:
- Every member can list the team
- Only the MASTER adds or removes members; new members are USERs
- The MASTER cannot remove itself and no MASTER can be removed
- Members of other companies are never touched
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brandhub.auth.passwords import hash_password
from brandhub.auth.principal import Principal
from brandhub.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from brandhub.models.user import User, UserRole

logger = logging.getLogger(__name__)


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


class TeamService:

    def __init__(self, session: Session):
        self.session = session

    def list_members(self, principal: Principal) -> List[dict]:
        users = (
            self.session.query(User)
            .filter(User.company_id == principal.company_id)
            .order_by(User.created_at.asc())
            .all()
        )
        return [user_to_dict(u) for u in users]

    def add_member(
        self,
        principal: Principal,
        email: Optional[str],
        password: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
    ) -> dict:
        """
        Create a USER in the principal's company.

        Raises:
            AuthorizationError: Caller is not the MASTER
            ValidationError: Missing field
            ConflictError: Email already registered
        """
        self._require_master(principal)

        if not all([email, password, first_name, last_name]):
            raise ValidationError("All fields are required")

        email = email.strip().lower()
        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            role=UserRole.USER.value,
            company_id=principal.company_id,
        )
        try:
            with self.session.begin_nested():
                self.session.add(user)
        except IntegrityError:
            raise ConflictError("User with this email already exists")

        logger.info(
            "Team member added",
            extra={
                "user_id": user.id,
                "company_id": principal.company_id,
                "added_by": principal.user_id,
            },
        )
        return user_to_dict(user)

    def remove_member(self, principal: Principal, user_id: Optional[str]) -> None:
        """
        Delete a USER from the principal's company.

        Raises:
            AuthorizationError: Caller not MASTER, other company, or MASTER target
            ValidationError: Missing id or self-removal
            NotFoundError: Unknown user
        """
        self._require_master(principal)

        if not user_id:
            raise ValidationError("User ID is required")

        if user_id == principal.user_id:
            raise ValidationError("Cannot delete yourself")

        user = self.session.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        if user.company_id != principal.company_id:
            raise AuthorizationError("Cannot delete users from other companies")

        if user.is_master:
            raise AuthorizationError("Cannot delete the master user")

        self.session.delete(user)
        self.session.flush()

        logger.info(
            "Team member removed",
            extra={
                "user_id": user_id,
                "company_id": principal.company_id,
                "removed_by": principal.user_id,
            },
        )

    def _require_master(self, principal: Principal) -> None:
        if not principal.is_master:
            raise AuthorizationError("Only the master user can manage the team")
