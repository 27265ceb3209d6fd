from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import configure_logging, cors_origins
from app.core.errors import CatalogError
from app.schemas.producto import describe_errors
from app.db.client import connect_db, disconnect_db
from app.routers import productos

configure_logging()

app = FastAPI(title="API Nuevo - Catálogo de Productos")

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# -------------

@app.on_event("startup")
async def startup():
    await connect_db()

@app.on_event("shutdown")
async def shutdown():
    await disconnect_db()

@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": describe_errors(exc.errors())})

@app.get("/health")
async def health():
    return {"status": "ok"}

app.include_router(productos.router, tags=["Productos"])
