"""
Staff User and Session Repositories - Data Access Layer
"""
from typing import Optional

from coffee_pos.repositories.base import DocumentRepository
from coffee_pos.schemas.auth import StaffUserRecord
from coffee_pos.utils import format_timestamp


class StaffUserRepository(DocumentRepository[StaffUserRecord]):
    """Repository for the `staff-users` collection"""
    
    collection = "staff-users"
    schema = StaffUserRecord
    
    def get_by_email(self, email: str) -> Optional[StaffUserRecord]:
        """Get staff user by (lower-cased) email"""
        users = self.find(where=[("email", "==", email.lower())], limit=1)
        return users[0] if users else None


class RevokedSessionRepository:
    """Signed-out session ids (JWT `jti` claims)"""
    
    collection = "revoked-sessions"
    
    def __init__(self, store):
        self.store = store
    
    def revoke(self, jti: str, revoked_at) -> None:
        """Record a session id as signed out"""
        self.store.insert(self.collection, {"jti": jti, "revokedAt": format_timestamp(revoked_at)})
    
    def is_revoked(self, jti: str) -> bool:
        """Check if a session id was signed out"""
        return bool(self.store.query(self.collection, where=[("jti", "==", jti)], limit=1))
