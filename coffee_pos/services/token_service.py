"""
Customer Token Service - one-time links that let a customer place one order
"""
import logging
import secrets
from datetime import timedelta
from typing import Callable, List, Optional

from coffee_pos.exceptions import ConflictError, NotFoundError, ValidationError
from coffee_pos.repositories.document_store import DocumentStore
from coffee_pos.repositories.token_repository import CustomerTokenRepository
from coffee_pos.schemas.token import CustomerToken, TokenPrefill, TokenValidation
from coffee_pos.utils import format_timestamp, utcnow

logger = logging.getLogger(__name__)

DEFAULT_TTL_HOURS = 48

REASON_NOT_FOUND = "not found"
REASON_ALREADY_USED = "already used"
REASON_EXPIRED = "expired"


def generate_token() -> str:
    """128 random bits as 32 hex characters; encodes nothing"""
    return secrets.token_hex(16)


class CustomerTokenService:
    """
    Issues, validates and consumes customer link tokens
    
    A token is a capability: whoever holds the link may submit one order.
    There is no customer identity behind it.
    """
    
    def __init__(
        self,
        store: DocumentStore,
        public_origin: str = "",
        default_ttl_hours: int = DEFAULT_TTL_HOURS,
        clock: Callable = utcnow
    ):
        self.repository = CustomerTokenRepository(store)
        self.public_origin = public_origin.rstrip("/")
        self.default_ttl_hours = default_ttl_hours
        self.clock = clock
    
    def link_for(self, token: str) -> str:
        """Customer-facing order link for a token"""
        return f"{self.public_origin}/customer/{token}"
    
    def issue(
        self,
        created_by: str,
        prefill: Optional[TokenPrefill] = None,
        ttl_hours: Optional[int] = None
    ) -> str:
        """
        Create a new unused token
        
        Args:
            created_by: Staff uid issuing the link
            prefill: Optional customer details shown on the order form
            ttl_hours: Hours until expiry (default from settings)
        
        Returns:
            Raw token value; the record id is never handed out
        """
        ttl_hours = self.default_ttl_hours if ttl_hours is None else ttl_hours
        if ttl_hours < 0:
            raise ValidationError("ttl_hours must not be negative")
        
        prefill = prefill or TokenPrefill()
        token = generate_token()
        now = self.clock()
        
        token_data = {
            "token": token,
            "customerName": prefill.customer_name or "",
            "customerPhone": prefill.customer_phone or "",
            "customerAddress": prefill.customer_address or "",
            "createdAt": format_timestamp(now),
            "expiresAt": format_timestamp(now + timedelta(hours=ttl_hours)),
            "createdBy": created_by,
            "isUsed": False,
        }
        record = self.repository.create(token_data)
        logger.info("Customer token %s issued by %s, expires %s", record.id, created_by, record.expires_at)
        return token
    
    def validate(self, token: str) -> TokenValidation:
        """
        Check a token; first failing check wins
        
        not found -> already used -> expired (expiresAt <= now) -> valid
        """
        record = self.repository.get_by_token(token)
        if record is None:
            return TokenValidation(valid=False, reason=REASON_NOT_FOUND)
        if record.is_used:
            return TokenValidation(valid=False, token_record=record, reason=REASON_ALREADY_USED)
        if record.expires_at <= self.clock():
            return TokenValidation(valid=False, token_record=record, reason=REASON_EXPIRED)
        return TokenValidation(valid=True, token_record=record)
    
    def consume(self, token_record_id: str, order_id: str) -> CustomerToken:
        """
        Mark a token used and bind it to the order it produced
        
        Call only after the order is stored. Consuming again for the same
        order is a no-op.
        
        Raises:
            NotFoundError: If the token record no longer exists
            ConflictError: If the token was used for a different order,
                or changed while being consumed
        """
        record = self.repository.get_by_id(token_record_id)
        if record is None:
            raise NotFoundError(f"Customer token {token_record_id} not found")
        if record.is_used:
            if record.order_id == order_id:
                return record
            raise ConflictError(
                f"Customer token {token_record_id} already used for order {record.order_id}"
            )
        
        now = self.clock()
        version = self.repository.update(
            token_record_id,
            {"isUsed": True, "usedAt": format_timestamp(now), "orderId": order_id},
            expected_version=record.version
        )
        logger.info("Customer token %s consumed by order %s", token_record_id, order_id)
        return record.model_copy(update={
            "is_used": True,
            "used_at": now,
            "order_id": order_id,
            "version": version,
        })
    
    def list_active(self, created_by: Optional[str] = None) -> List[CustomerToken]:
        """Unused, unexpired tokens, optionally only those one staff member issued"""
        now = self.clock()
        return [t for t in self.repository.get_unused(created_by) if t.expires_at > now]
