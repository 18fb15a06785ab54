"""
Customer Order Service - placing an order through a one-time link
"""
import logging
from typing import Tuple

from coffee_pos.exceptions import ConflictError, NotFoundError, ValidationError
from coffee_pos.schemas.order import CustomerDetails, CustomerOrderSubmit, Order
from coffee_pos.schemas.token import CustomerLinkResponse, TokenPrefill
from coffee_pos.services.menu_service import MenuService
from coffee_pos.services.order_service import OrderService
from coffee_pos.services.token_service import REASON_NOT_FOUND, CustomerTokenService
from coffee_pos.services.tracking import tracking_url

logger = logging.getLogger(__name__)


class CustomerOrderService:
    """Service layer tying tokens, menu and orders together for customers"""
    
    def __init__(
        self,
        token_service: CustomerTokenService,
        menu_service: MenuService,
        order_service: OrderService,
        public_origin: str = ""
    ):
        self.tokens = token_service
        self.menu = menu_service
        self.orders = order_service
        self.public_origin = public_origin
    
    def get_link(self, token: str) -> CustomerLinkResponse:
        """What the customer order page shows for a link"""
        result = self.tokens.validate(token)
        if not result.valid:
            return CustomerLinkResponse(valid=False, reason=result.reason)
        record = result.token_record
        return CustomerLinkResponse(
            valid=True,
            prefill=TokenPrefill(
                customer_name=record.customer_name or None,
                customer_phone=record.customer_phone or None,
                customer_address=record.customer_address or None
            ),
            expires_at=record.expires_at
        )
    
    def submit(self, token: str, submission: CustomerOrderSubmit) -> Tuple[Order, str]:
        """
        Place an order with a customer link
        
        Steps:
        1. Validate the token
        2. Resolve menu picks into priced items
        3. Create the order
        4. Consume the token, binding it to the order
        
        Creating the order and consuming the token are separate writes. If
        another submission consumed the token in between, the order created
        here is deleted again and ConflictError is raised.
        
        Returns:
            Created order and its tracking URL
        
        Raises:
            NotFoundError: If the token or a menu item does not exist
            ValidationError: If the token is used/expired or the order is invalid
            ConflictError: If the token was consumed by a concurrent submission
        """
        result = self.tokens.validate(token)
        if not result.valid:
            if result.reason == REASON_NOT_FOUND:
                raise NotFoundError("Customer link not found")
            raise ValidationError(f"Customer link {result.reason}")
        
        items = self.menu.build_order_items(submission.items)
        customer = CustomerDetails(
            customer_name=submission.customer_name,
            customer_phone=submission.customer_phone,
            customer_address=submission.customer_address
        )
        order = self.orders.create_order(customer, items, submission.notes)
        
        try:
            self.tokens.consume(result.token_record.id, order.id)
        except ConflictError:
            logger.warning(
                "Customer token %s consumed concurrently; removing order %s",
                result.token_record.id, order.id
            )
            self.orders.delete_order(order.id)
            raise
        
        return order, tracking_url(self.public_origin, order.id)
