"""
Repositories package
"""
from coffee_pos.repositories.document_store import DocumentStore, Record, SqlDocumentStore
from coffee_pos.repositories.order_repository import OrderRepository
from coffee_pos.repositories.token_repository import CustomerTokenRepository
from coffee_pos.repositories.product_repository import ProductRepository, AddonRepository
from coffee_pos.repositories.staff_repository import StaffUserRepository, RevokedSessionRepository

__all__ = [
    "DocumentStore",
    "Record",
    "SqlDocumentStore",
    "OrderRepository",
    "CustomerTokenRepository",
    "ProductRepository",
    "AddonRepository",
    "StaffUserRepository",
    "RevokedSessionRepository"
]
