"""
Document Store - generic collection/id/JSON data access over SQLAlchemy
"""
import logging
import operator
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from coffee_pos.exceptions import ConflictError, NotFoundError, StoreError
from coffee_pos.models.document import Document
from coffee_pos.utils import format_timestamp

logger = logging.getLogger(__name__)

# (field, op, value), e.g. ("isUsed", "==", False)
Predicate = Tuple[str, str, Any]

OPERATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


@dataclass
class Record:
    """A stored document: generated id, JSON data and revision"""
    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    version: int = 1


class DocumentStore(Protocol):
    """Contract every document store implementation satisfies"""
    
    def get(self, collection: str, doc_id: str) -> Optional[Record]: ...
    
    def query(
        self,
        collection: str,
        where: Iterable[Predicate] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Record]: ...
    
    def insert(self, collection: str, data: Dict[str, Any]) -> str: ...
    
    def update(
        self,
        collection: str,
        doc_id: str,
        patch: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> int: ...
    
    def delete(self, collection: str, doc_id: str) -> None: ...


def encode_value(value: Any) -> Any:
    """Convert a predicate value to the form it is stored in"""
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    return value


def _field_expression(field_name: str, value: Any):
    element = Document.data[field_name]
    if isinstance(value, bool):
        return element.as_boolean()
    if isinstance(value, int):
        return element.as_integer()
    if isinstance(value, float):
        return element.as_float()
    return element.as_string()


class SqlDocumentStore:
    """
    Document store backed by the `documents` table
    
    Every call is its own unit of work: it commits on success and rolls
    back on failure. Updates are compare-and-swap on the `version` column.
    """
    
    def __init__(self, db: Session):
        self.db = db
    
    @contextmanager
    def _unit_of_work(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Store %s failed: %s", action, e)
            raise StoreError(f"Document store {action} failed: {e}") from e
    
    def _load(self, collection: str, doc_id: str) -> Optional[Document]:
        return self.db.query(Document).filter(
            Document.collection == collection,
            Document.id == doc_id
        ).first()
    
    def get(self, collection: str, doc_id: str) -> Optional[Record]:
        """Get document by id, or None if absent"""
        with self._unit_of_work("get"):
            document = self._load(collection, doc_id)
            if not document:
                return None
            return Record(id=document.id, data=dict(document.data), version=document.version)
    
    def query(
        self,
        collection: str,
        where: Iterable[Predicate] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Record]:
        """
        Query documents by equality/range predicates on top-level fields
        
        Args:
            collection: Collection name
            where: Predicates as (field, op, value); op is one of OPERATORS
            order_by: Field to sort on (compared as strings)
            descending: Sort direction
            limit: Maximum number of documents
        
        Returns:
            Matching documents
        """
        q = self.db.query(Document).filter(Document.collection == collection)
        
        for field_name, op, value in where:
            if op not in OPERATORS:
                raise ValueError(f"Unsupported operator: {op}")
            value = encode_value(value)
            q = q.filter(OPERATORS[op](_field_expression(field_name, value), value))
        
        if order_by:
            column = Document.data[order_by].as_string()
            q = q.order_by(column.desc() if descending else column.asc())
        q = q.order_by(Document.created_at, Document.id)
        
        if limit is not None:
            q = q.limit(limit)
        
        with self._unit_of_work("query"):
            return [
                Record(id=d.id, data=dict(d.data), version=d.version)
                for d in q.all()
            ]
    
    def insert(self, collection: str, data: Dict[str, Any]) -> str:
        """Insert new document, returning its generated id"""
        document = Document(
            id=uuid.uuid4().hex,
            collection=collection,
            data=dict(data),
            version=1
        )
        with self._unit_of_work("insert"):
            self.db.add(document)
            self.db.commit()
            logger.debug("Inserted %s/%s", collection, document.id)
            return document.id
    
    def update(
        self,
        collection: str,
        doc_id: str,
        patch: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> int:
        """
        Merge patch into a document's top-level fields
        
        Args:
            collection: Collection name
            doc_id: Document id
            patch: Fields to overwrite
            expected_version: Version the caller read; None skips the caller check
        
        Returns:
            New version of the document
        
        Raises:
            NotFoundError: If the document does not exist
            ConflictError: If the document changed since it was read
        """
        with self._unit_of_work("update"):
            document = self._load(collection, doc_id)
            if not document:
                raise NotFoundError(f"{collection}/{doc_id} not found")
            
            current_version = document.version
            if expected_version is not None and current_version != expected_version:
                raise ConflictError(
                    f"{collection}/{doc_id} is at version {current_version}, "
                    f"expected {expected_version}"
                )
            
            merged = {**document.data, **patch}
            result = self.db.execute(
                update(Document)
                .where(
                    Document.collection == collection,
                    Document.id == doc_id,
                    Document.version == current_version
                )
                .values(data=merged, version=current_version + 1, updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                raise ConflictError(f"{collection}/{doc_id} was modified concurrently")
            
            self.db.commit()
            return current_version + 1
    
    def delete(self, collection: str, doc_id: str) -> None:
        """Hard delete document"""
        with self._unit_of_work("delete"):
            document = self._load(collection, doc_id)
            if not document:
                raise NotFoundError(f"{collection}/{doc_id} not found")
            self.db.delete(document)
            self.db.commit()
            logger.debug("Deleted %s/%s", collection, doc_id)
