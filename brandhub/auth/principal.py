"""
Resolved request principal.

Every service operation receives a Principal explicitly; nothing reads
identity from ambient request state.
"""

from dataclasses import dataclass

from brandhub.models.user import UserRole


@dataclass(frozen=True)
class Principal:
    """Authenticated caller: who they are and which company they act for."""
    user_id: str
    company_id: str
    role: str
    email: str

    @property
    def is_master(self) -> bool:
        return self.role == UserRole.MASTER.value
