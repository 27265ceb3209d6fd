import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from app.core.errors import StoreUnavailable

from app.core.config import MONGO_URL, MONGO_DB, MONGO_COLLECTION, MONGO_TIMEOUT_MS

LOGGER = logging.getLogger(__name__)

client: Optional[AsyncIOMotorClient] = None


async def connect_db():
    global client
    if client is None:
        client = AsyncIOMotorClient(MONGO_URL, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS)
        LOGGER.info("Conectado a MongoDB %s (db=%s)", MONGO_URL, MONGO_DB)


async def disconnect_db():
    global client
    if client is not None:
        client.close()
        client = None
        LOGGER.info("Conexion a MongoDB cerrada")


def get_collection():
    if client is None:
        raise StoreUnavailable("Base de datos no disponible")
    return client[MONGO_DB][MONGO_COLLECTION]
