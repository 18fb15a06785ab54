"""
Base repository - decodes store records into typed schemas
"""
import logging
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as SchemaValidationError

from coffee_pos.exceptions import NotFoundError, StoreError, ValidationError
from coffee_pos.repositories.document_store import DocumentStore, Predicate, Record

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class DocumentRepository(Generic[ModelT]):
    """Typed access to one collection of the document store"""
    
    collection: str
    schema: Type[ModelT]
    
    def __init__(self, store: DocumentStore):
        self.store = store
    
    def _decode(self, record: Record) -> ModelT:
        return self.schema.model_validate(
            {**record.data, "id": record.id, "version": record.version}
        )
    
    def _decode_many(self, records: Iterable[Record]) -> List[ModelT]:
        """Decode records, skipping (and logging) malformed ones"""
        decoded = []
        for record in records:
            try:
                decoded.append(self._decode(record))
            except SchemaValidationError as e:
                logger.warning(
                    "Skipping malformed %s record %s: %s",
                    self.collection, record.id, e.errors()
                )
        return decoded
    
    @staticmethod
    def encode(model: BaseModel, **kwargs) -> Dict[str, Any]:
        """Dump a schema to the camelCase JSON form it is stored in"""
        return model.model_dump(mode="json", by_alias=True, **kwargs)
    
    def get_by_id(self, doc_id: str) -> Optional[ModelT]:
        """Get document by id, or None if absent"""
        record = self.store.get(self.collection, doc_id)
        if record is None:
            return None
        try:
            return self._decode(record)
        except SchemaValidationError as e:
            logger.error("Malformed %s record %s: %s", self.collection, doc_id, e.errors())
            raise StoreError(f"Malformed {self.collection} record {doc_id}") from e
    
    def find(
        self,
        where: Iterable[Predicate] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[ModelT]:
        """Query and decode documents"""
        records = self.store.query(
            self.collection,
            where=where,
            order_by=order_by,
            descending=descending,
            limit=limit
        )
        return self._decode_many(records)
    
    def check(self, record: Record) -> ModelT:
        """
        Decode a record that is about to be written
        
        Raises:
            ValidationError: If the record would not read back
        """
        try:
            return self._decode(record)
        except SchemaValidationError as e:
            raise ValidationError(f"Invalid {self.collection} document: {e.errors()}") from e
    
    def create(self, data: Dict[str, Any]) -> ModelT:
        """Validate and insert data, returning the decoded document"""
        self.check(Record(id="", data=data, version=1))
        doc_id = self.store.insert(self.collection, data)
        return self._decode(Record(id=doc_id, data=data, version=1))
    
    def patch(self, doc_id: str, changes: Dict[str, Any]) -> ModelT:
        """
        Apply a partial change, refusing ones that leave an unreadable document
        
        Raises:
            NotFoundError: If the document does not exist
            ValidationError: If the merged document is invalid
            ConflictError: If the document changed since it was read
        """
        record = self.store.get(self.collection, doc_id)
        if record is None:
            raise NotFoundError(f"{self.collection}/{doc_id} not found")
        merged = {**record.data, **changes}
        self.check(Record(id=doc_id, data=merged, version=record.version))
        version = self.store.update(self.collection, doc_id, changes, expected_version=record.version)
        return self._decode(Record(id=doc_id, data=merged, version=version))
    
    def update(self, doc_id: str, patch: Dict[str, Any], expected_version: Optional[int] = None) -> int:
        """Patch document, returning its new version"""
        return self.store.update(self.collection, doc_id, patch, expected_version=expected_version)
    
    def delete(self, doc_id: str) -> None:
        """Hard delete document"""
        self.store.delete(self.collection, doc_id)
