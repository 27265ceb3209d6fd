from typing import Any
from fastapi import APIRouter, Body, Depends, Query, status
from app.db.client import get_collection
from app.db.store import MongoProductoStore
from app.services.productos import ProductCatalogService, DEFAULT_LISTING_SIZE

router = APIRouter()


def get_producto_service() -> ProductCatalogService:
    return ProductCatalogService(MongoProductoStore(get_collection()))


# Obtener todos los productos
@router.get("/producto")
async def listar_productos(service: ProductCatalogService = Depends(get_producto_service)):
    return await service.list()

# Obtener un producto por _id; null si no existe
@router.get("/producto/{id}")
async def obtener_producto(id: str, service: ProductCatalogService = Depends(get_producto_service)):
    return await service.get_by_id(id)

@router.post("/producto", status_code=status.HTTP_201_CREATED)
async def crear_producto(data: Any = Body(None), service: ProductCatalogService = Depends(get_producto_service)):
    return await service.create(data)

@router.put("/producto/{id}")
async def actualizar_producto(id: str, data: Any = Body(None), service: ProductCatalogService = Depends(get_producto_service)):
    return await service.update(id, data)

@router.delete("/producto/{id}")
async def eliminar_producto(id: str, service: ProductCatalogService = Depends(get_producto_service)):
    return await service.delete(id)

# Primeros productos agregados
@router.get("/productos/primeros")
async def primeros_productos(
    n: int = Query(DEFAULT_LISTING_SIZE, ge=1, le=100),
    service: ProductCatalogService = Depends(get_producto_service),
):
    return await service.list_first(n)

# Ultimos productos agregados, los mas recientes primero
@router.get("/productos/ultimos")
async def ultimos_productos(
    n: int = Query(DEFAULT_LISTING_SIZE, ge=1, le=100),
    service: ProductCatalogService = Depends(get_producto_service),
):
    return await service.list_last(n)
