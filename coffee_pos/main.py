"""
FastAPI Application Entry Point - Coffee POS Service
"""
import logging
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from coffee_pos import __version__
from coffee_pos.config import Settings, settings as default_settings
from coffee_pos.database import create_db_engine, create_session_factory, init_db
from coffee_pos.logging_config import configure_logging
from coffee_pos.api import auth, customer, dashboard, health, orders, products, tokens
from coffee_pos.api.errors import register_error_handlers
from coffee_pos.utils import utcnow

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, clock: Callable = utcnow) -> FastAPI:
    """
    Build the application
    
    The engine and session factory are created here and live on
    `app.state`; request handlers get sessions from them through
    dependencies.
    """
    settings = settings or default_settings
    configure_logging(settings.SERVICE_NAME, settings.LOG_LEVEL)
    
    app = FastAPI(
        title="Coffee POS Service",
        description="Orders, menu and one-time customer links for a coffee delivery business",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.clock = clock
    app.state.engine = create_db_engine(settings.DATABASE_URL)
    app.state.session_factory = create_session_factory(app.state.engine)
    
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    register_error_handlers(app)
    
    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(tokens.router)
    app.include_router(customer.router)
    app.include_router(dashboard.router)
    
    # Prometheus metrics
    if settings.ENABLE_METRICS:
        Instrumentator().instrument(app).expose(app)
    
    @app.on_event("startup")
    def startup_event():
        """Initialize database on startup"""
        logger.info("Starting %s...", settings.SERVICE_NAME)
        init_db(app.state.engine, settings)
        logger.info("Public origin for customer links: %s", settings.PUBLIC_ORIGIN)
        logger.info("%s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)
    
    @app.on_event("shutdown")
    def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutting down %s...", settings.SERVICE_NAME)
        app.state.engine.dispose()
    
    return app


app = create_app()
