"""
Models package
"""
from coffee_pos.models.document import Document

__all__ = ["Document"]
