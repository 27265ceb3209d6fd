import logging
import math
from numbers import Real
from typing import Any, Dict, List, Optional

from app.core.errors import StoreUnavailable, StoreValidationError, ValidationError
from app.db.store import ASCENDING, DESCENDING, ProductoStore

LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "nombre_producto",
    "descripcion",
    "color",
    "precio_venta",
    "costo_produccion",
    "stock_disponible",
    "imagen",
)
TEXT_FIELDS = ("nombre_producto", "descripcion", "color", "imagen")
NUMBER_FIELDS = ("precio_venta", "costo_produccion", "stock_disponible")

DEFAULT_LISTING_SIZE = 3


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_producto(data: Any) -> None:
    """Valida un producto nuevo: presencia de campos y luego tipos.

    El primer campo faltante (en el orden de REQUIRED_FIELDS) corta la
    validacion. Los errores de tipo se reportan con un solo mensaje.
    """
    if not isinstance(data, dict):
        data = {}
    for field in REQUIRED_FIELDS:
        if field not in data:
            raise ValidationError(f"El campo {field} es obligatorio.")

    if not all(isinstance(data[f], str) for f in TEXT_FIELDS) or not all(
        _is_number(data[f]) for f in NUMBER_FIELDS
    ):
        raise ValidationError("Los tipos de datos de los campos son incorrectos.")


class ProductCatalogService:
    def __init__(self, store: ProductoStore):
        self.store = store

    async def list(self) -> List[Dict[str, Any]]:
        try:
            return await self.store.find()
        except Exception as exc:
            LOGGER.exception("Fallo al listar productos")
            raise StoreUnavailable("Error obteniendo productos") from exc

    async def get_by_id(self, id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.store.find_one(id)
        except Exception as exc:
            LOGGER.exception("Fallo al obtener producto %s", id)
            raise StoreUnavailable("Error obteniendo producto") from exc

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            validate_producto(data)
        except ValidationError as exc:
            LOGGER.info("Producto rechazado: %s", exc.message)
            raise

        try:
            return await self.store.insert(data)
        except StoreValidationError as exc:
            LOGGER.info("Producto rechazado por el esquema: %s", exc.messages)
            raise ValidationError(exc.messages) from exc
        except Exception as exc:
            LOGGER.exception("Fallo al crear producto")
            raise StoreUnavailable("Error creando producto.") from exc

    async def update(self, id: str, data: Any) -> Optional[Dict[str, Any]]:
        # Sin validacion: el patch se aplica tal cual; sin cuerpo es un patch vacio
        if data is None:
            data = {}
        try:
            return await self.store.update_by_id(id, data)
        except Exception as exc:
            LOGGER.exception("Fallo al actualizar producto %s", id)
            raise StoreUnavailable("Error actualizando producto") from exc

    async def delete(self, id: str) -> Dict[str, str]:
        try:
            deleted = await self.store.delete_by_id(id)
        except Exception as exc:
            LOGGER.exception("Fallo al eliminar producto %s", id)
            raise StoreUnavailable("Error eliminando producto") from exc
        if not deleted:
            LOGGER.debug("Producto %s no existia", id)
        return {"message": "Producto eliminado"}

    async def list_first(self, n: int = DEFAULT_LISTING_SIZE) -> List[Dict[str, Any]]:
        """Primeros `n` productos agregados, el mas antiguo primero."""
        try:
            return await self.store.find(sort=("_id", ASCENDING), limit=n)
        except Exception as exc:
            LOGGER.exception("Fallo al listar los primeros productos")
            raise StoreUnavailable("Error obteniendo los primeros productos") from exc

    async def list_last(self, n: int = DEFAULT_LISTING_SIZE) -> List[Dict[str, Any]]:
        """Ultimos `n` productos agregados, el mas reciente primero."""
        try:
            return await self.store.find(sort=("_id", DESCENDING), limit=n)
        except Exception as exc:
            LOGGER.exception("Fallo al listar los ultimos productos")
            raise StoreUnavailable("Error obteniendo los últimos productos") from exc
