import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.errors import WriteError

from app.core.errors import StoreValidationError
from app.schemas.producto import build_document, document_errors

LOGGER = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1

# Codigo de MongoDB para "Document failed validation"
DOCUMENT_VALIDATION_FAILURE = 121
DOCUMENT_VALIDATION_MESSAGE = "El documento no cumple la validación de la colección."


class ProductoStore(ABC):
    """Operaciones que el catalogo necesita de la base documental."""

    @abstractmethod
    async def find(
        self,
        filter: Optional[Dict[str, Any]] = None,
        sort: Optional[Tuple[str, int]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def find_one(self, id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Inserta y devuelve el documento con su `_id` asignado.

        Lanza StoreValidationError si el documento no cumple el esquema.
        """

    @abstractmethod
    async def update_by_id(self, id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def delete_by_id(self, id: str) -> bool:
        ...


def to_object_id(id: str) -> ObjectId:
    # bson.errors.InvalidId si el id no es un ObjectId valido
    return ObjectId(id)


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    out = dict(doc)
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    return out


class MongoProductoStore(ProductoStore):
    """ProductoStore sobre una coleccion de motor."""

    def __init__(self, collection):
        self.collection = collection

    async def find(self, filter=None, sort=None, limit=None):
        cursor = self.collection.find(filter or {})
        if sort is not None:
            cursor = cursor.sort(*sort)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [serialize(doc) async for doc in cursor]

    async def find_one(self, id):
        doc = await self.collection.find_one({"_id": to_object_id(id)})
        return serialize(doc)

    async def insert(self, record):
        try:
            doc = build_document(record)
        except ValidationError as exc:
            raise StoreValidationError(document_errors(exc)) from exc
        try:
            result = await self.collection.insert_one(doc)
        except WriteError as exc:
            if exc.code == DOCUMENT_VALIDATION_FAILURE:
                raise StoreValidationError([DOCUMENT_VALIDATION_MESSAGE]) from exc
            raise
        doc["_id"] = result.inserted_id
        LOGGER.debug("Producto insertado %s", result.inserted_id)
        return serialize(doc)

    async def update_by_id(self, id, patch):
        oid = to_object_id(id)
        changes = {k: v for k, v in patch.items() if k != "_id"}
        if not changes:
            return serialize(await self.collection.find_one({"_id": oid}))
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return serialize(doc)

    async def delete_by_id(self, id):
        result = await self.collection.delete_one({"_id": to_object_id(id)})
        return result.deleted_count > 0
