"""
FastAPI dependencies: settings, store, services and the signed-in staff user
"""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from coffee_pos.config import Settings
from coffee_pos.database import get_db
from coffee_pos.repositories.document_store import SqlDocumentStore
from coffee_pos.schemas.auth import StaffUser
from coffee_pos.services import (
    CustomerOrderService,
    CustomerTokenService,
    DashboardService,
    MenuService,
    OrderService,
    PricingEngine,
    StaffAuthService
)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings the app was created with"""
    return request.app.state.settings


def get_clock(request: Request):
    """Clock the app was created with"""
    return request.app.state.clock


def get_store(db: Session = Depends(get_db)) -> SqlDocumentStore:
    """Document store bound to the request's session"""
    return SqlDocumentStore(db)


def get_order_service(
    store: SqlDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    clock=Depends(get_clock)
) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(store, PricingEngine(settings.UPSIZE_SURCHARGE), clock)


def get_token_service(
    store: SqlDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    clock=Depends(get_clock)
) -> CustomerTokenService:
    """Dependency to get CustomerTokenService instance"""
    return CustomerTokenService(store, settings.PUBLIC_ORIGIN, settings.TOKEN_TTL_HOURS, clock)


def get_menu_service(
    store: SqlDocumentStore = Depends(get_store),
    clock=Depends(get_clock)
) -> MenuService:
    """Dependency to get MenuService instance"""
    return MenuService(store, clock)


def get_customer_order_service(
    tokens: CustomerTokenService = Depends(get_token_service),
    menu: MenuService = Depends(get_menu_service),
    orders: OrderService = Depends(get_order_service),
    settings: Settings = Depends(get_settings)
) -> CustomerOrderService:
    """Dependency to get CustomerOrderService instance"""
    return CustomerOrderService(tokens, menu, orders, settings.PUBLIC_ORIGIN)


def get_dashboard_service(
    store: SqlDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    clock=Depends(get_clock)
) -> DashboardService:
    """Dependency to get DashboardService instance"""
    return DashboardService(store, settings.DISPLAY_TIMEZONE, clock)


def get_auth_service(
    store: SqlDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
) -> StaffAuthService:
    """Dependency to get StaffAuthService instance"""
    return StaffAuthService(store, settings.SECRET_KEY, settings.ACCESS_TOKEN_EXPIRES_HOURS)


def get_current_staff(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    auth: StaffAuthService = Depends(get_auth_service)
) -> StaffUser:
    """Signed-in staff user; 401 without a valid bearer session"""
    user = auth.current_user(credentials.credentials) if credentials else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return user
