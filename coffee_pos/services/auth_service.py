"""
Staff Auth Service - sign-in, sign-out and current user for staff
"""
import logging
import uuid
from datetime import timedelta
from typing import Callable, Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from coffee_pos.exceptions import AuthError
from coffee_pos.repositories.document_store import DocumentStore
from coffee_pos.repositories.staff_repository import RevokedSessionRepository, StaffUserRepository
from coffee_pos.schemas.auth import SessionResponse, StaffRegister, StaffUser
from coffee_pos.utils import format_timestamp, utcnow

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


class StaffAuthService:
    """
    Auth provider for staff
    
    Sessions are HS256 JWTs carrying the staff uid; signing out records
    the token's `jti` so it is rejected afterwards.
    """
    
    def __init__(
        self,
        store: DocumentStore,
        secret_key: str,
        expires_hours: int = 12,
        clock: Callable = utcnow
    ):
        self.users = StaffUserRepository(store)
        self.revoked = RevokedSessionRepository(store)
        self.secret_key = secret_key
        self.expires_hours = expires_hours
        self.clock = clock
    
    def register(self, data: StaffRegister) -> StaffUser:
        """
        Add a staff member
        
        Raises:
            AuthError: If the email is already registered
        """
        email = data.email.lower()
        if self.users.get_by_email(email):
            raise AuthError(f"Staff user {email} already exists")
        
        record = self.users.create({
            "email": email,
            "displayName": data.display_name,
            "passwordHash": generate_password_hash(data.password),
            "createdAt": format_timestamp(self.clock()),
        })
        logger.info("Staff user %s registered", record.id)
        return StaffUser.model_validate(record.model_dump())
    
    def sign_in(self, email: str, password: str) -> SessionResponse:
        """
        Verify credentials and issue a session token
        
        Raises:
            AuthError: If email or password is wrong
        """
        user = self.users.get_by_email(email)
        if user is None or not check_password_hash(user.password_hash, password):
            logger.info("Failed sign-in for %s", email)
            raise AuthError("Invalid email or password")
        
        now = self.clock()
        expires_at = now + timedelta(hours=self.expires_hours)
        payload = {
            "sub": user.id,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": expires_at,
        }
        access_token = jwt.encode(payload, self.secret_key, algorithm=JWT_ALGORITHM)
        logger.info("Staff user %s signed in", user.id)
        
        return SessionResponse(
            access_token=access_token,
            expires_at=expires_at,
            user=StaffUser.model_validate(user.model_dump())
        )
    
    def _decode(self, access_token: str) -> Optional[dict]:
        try:
            return jwt.decode(access_token, self.secret_key, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.debug("Expired staff session")
        except jwt.InvalidTokenError as e:
            logger.debug("Invalid staff session: %s", e)
        return None
    
    def current_user(self, access_token: str) -> Optional[StaffUser]:
        """Staff user for a session token, or None if invalid, expired or signed out"""
        payload = self._decode(access_token)
        if payload is None or self.revoked.is_revoked(payload.get("jti", "")):
            return None
        user = self.users.get_by_id(payload.get("sub", ""))
        if user is None:
            return None
        return StaffUser.model_validate(user.model_dump())
    
    def sign_out(self, access_token: str) -> None:
        """Invalidate a session token; unknown tokens are ignored"""
        payload = self._decode(access_token)
        if payload is None:
            return
        self.revoked.revoke(payload["jti"], self.clock())
        logger.info("Staff user %s signed out", payload.get("sub"))
