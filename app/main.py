import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.utils.errors import FlotaError

settings = get_settings()
logger = logging.getLogger(__name__)

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: make sure the receipts folder exists
    settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)

    # Startup: create the schema directly (local dev; production uses Alembic)
    if settings.CREATE_TABLES_ON_STARTUP:
        from app import models  # noqa: F401
        from app.database import Base, engine

        Base.metadata.create_all(bind=engine)
        logger.info("Tables created on startup (CREATE_TABLES_ON_STARTUP=true).")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


@app.exception_handler(FlotaError)
async def flota_error_handler(request: Request, exc: FlotaError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.codigo, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "codigo": exc.codigo},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("%s %s -> database error: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Almacenamiento no disponible.",
            "codigo": "STORAGE_UNAVAILABLE",
        },
    )


@app.get(f"{settings.API_PREFIX}/health")
def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

# Órdenes de Trabajo
from app.routers import ordenes  # noqa: E402

app.include_router(
    ordenes.router,
    prefix=f"{settings.API_PREFIX}/ots",
    tags=["Órdenes de Trabajo"],
)

# Presupuestos
from app.routers import presupuestos  # noqa: E402

app.include_router(
    presupuestos.router,
    prefix=f"{settings.API_PREFIX}/budgets",
    tags=["Presupuestos"],
)

# Gastos + presupuesto anual
from app.routers import gastos  # noqa: E402

app.include_router(
    gastos.router,
    prefix=f"{settings.API_PREFIX}/expenses",
    tags=["Gastos"],
)

# Notificaciones
from app.routers import notificaciones  # noqa: E402

app.include_router(
    notificaciones.router,
    prefix=f"{settings.API_PREFIX}/notifications",
    tags=["Notificaciones"],
)

# Proveedores
from app.routers import proveedores  # noqa: E402

app.include_router(
    proveedores.router,
    prefix=f"{settings.API_PREFIX}/providers",
    tags=["Proveedores"],
)

# Reportes / dashboard
from app.routers import reportes  # noqa: E402

app.include_router(
    reportes.router,
    prefix=f"{settings.API_PREFIX}/reports",
    tags=["Reportes"],
)
