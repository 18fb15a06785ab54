"""
SQLAlchemy Document model
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from coffee_pos.database import Base


class Document(Base):
    """One schemaless document in a named collection"""
    
    __tablename__ = "documents"
    
    id = Column(String(32), primary_key=True)
    collection = Column(String(100), nullable=False, index=True)
    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    __table_args__ = (
        Index("ix_documents_collection_id", "collection", "id"),
    )
    
    def __repr__(self):
        return f"<Document(collection='{self.collection}', id='{self.id}', version={self.version})>"


# Token links are looked up by value on every customer visit
customer_token_index = Index(
    "ix_documents_customer_token",
    Document.data["token"].as_string(),
    postgresql_where=Document.collection == "customer-tokens",
).ddl_if(dialect="postgresql")
