from typing import Any, Dict, Iterable, List
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ProductoDocument(BaseModel):
    """Esquema del documento tal como se guarda en la coleccion."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    nombre_producto: str
    descripcion: str
    color: str
    precio_venta: float = Field(..., ge=0)
    costo_produccion: float = Field(..., ge=0)
    stock_disponible: float = Field(..., ge=0)
    imagen: str


# Tipos de error de pydantic -> texto en castellano
ERROR_TEXTS = {
    "missing": "es obligatorio",
    "greater_than_equal": "debe ser mayor o igual a {ge}",
    "less_than_equal": "debe ser menor o igual a {le}",
    "finite_number": "debe ser un número finito",
    "string_type": "debe ser texto",
    "float_type": "debe ser numérico",
    "float_parsing": "debe ser numérico",
    "int_type": "debe ser un número entero",
    "int_parsing": "debe ser un número entero",
    "dict_type": "debe ser un objeto",
}

# Prefijos de FastAPI que no forman parte del nombre del campo
REQUEST_LOCATIONS = ("body", "query", "path")


def describe_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """Convierte errores de pydantic (o de FastAPI) en mensajes legibles."""
    messages = []
    for err in errors:
        if err["type"] == "json_invalid":
            messages.append("El cuerpo de la petición no es un JSON válido.")
            continue
        loc = list(err.get("loc", ()))
        if loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        field = ".".join(str(p) for p in loc) or "cuerpo"
        text = ERROR_TEXTS.get(err["type"])
        if text is None:
            messages.append(f"El campo {field} es inválido: {err['msg']}")
        else:
            messages.append(f"El campo {field} {text.format(**err.get('ctx', {}))}.")
    return messages


def document_errors(exc: ValidationError) -> List[str]:
    return describe_errors(exc.errors())


def build_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """Valida contra el esquema y devuelve solo los campos del modelo.

    Los valores se guardan como llegaron (un entero sigue siendo entero).
    """
    ProductoDocument.model_validate(data)
    return {field: data[field] for field in ProductoDocument.model_fields}
