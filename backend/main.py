"""FastAPI main application: pet inventory service."""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import inventory as inventory_api
from backend.app.config import CATALOG_PATH, DEFAULT_DB_PATH, STARTER_PET_COUNT, STRICT_PET_CATALOG
from backend.app.core.error_handling import create_error_response, log_error_with_context
from backend.app.core.inventory_manager import InventoryManager
from backend.app.core.pet_catalog import load_pet_catalog
from backend.app.db.migrate import apply_schema
from backend.app.db.store import SqliteBlobStore
from shared.config import _env_flag

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def _parse_cors_allowlist(raw: str) -> list[str]:
    origins = [o.strip() for o in raw.split(",") if o and o.strip()]
    if origins:
        return origins
    return [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


DEV_MODE = _env_flag("PETS_DEV_MODE", default=True)
API_TOKEN = os.environ.get("PETS_API_TOKEN", "").strip()
CORS_ALLOW_ORIGINS = _parse_cors_allowlist(os.environ.get("PETS_CORS_ALLOW_ORIGINS", ""))


def build_inventory_manager(db_path: str = DEFAULT_DB_PATH) -> InventoryManager:
    """Apply migrations and wire the SQLite store and catalog into a manager."""
    apply_schema(db_path)
    return InventoryManager(
        store=SqliteBlobStore(db_path),
        catalog=load_pet_catalog(),
        starter_count=STARTER_PET_COUNT,
        strict_catalog=STRICT_PET_CATALOG,
    )


def _collect_environment_diagnostics(request: Request) -> dict:
    """Collect structured environment diagnostics for /health/detail."""
    checks: dict[str, dict] = {}

    db_path = Path(DEFAULT_DB_PATH)
    checks["database"] = {"ok": db_path.exists(), "path": str(db_path)}

    catalog_path = Path(CATALOG_PATH)
    manager = getattr(request.app.state, "inventory_manager", None)
    pet_count = len(manager.catalog) if manager is not None else 0
    checks["pet_catalog"] = {
        "ok": pet_count > 0,
        "path": str(catalog_path),
        "file_exists": catalog_path.exists(),
        "pets": pet_count,
    }

    checks["sessions"] = {
        "ok": manager is not None,
        "active_players": len(manager.active_players()) if manager is not None else 0,
    }

    overall_ok = all(v.get("ok", False) for v in checks.values())
    return {"ok": overall_ok, "checks": checks}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not DEV_MODE:
        if "*" in CORS_ALLOW_ORIGINS:
            raise RuntimeError(
                "Unsafe CORS config: '*' is only allowed in dev mode. "
                "Set PETS_CORS_ALLOW_ORIGINS to explicit origins."
            )
        if not API_TOKEN:
            raise RuntimeError(
                "PETS_API_TOKEN is required when PETS_DEV_MODE=0."
            )
    if getattr(app.state, "inventory_manager", None) is None:
        app.state.inventory_manager = build_inventory_manager()
    manager: InventoryManager = app.state.inventory_manager
    logger.info(
        "API startup complete (dev_mode=%s, auth=%s, db=%s, pets=%d)",
        DEV_MODE,
        "enabled" if bool(API_TOKEN) else "disabled",
        DEFAULT_DB_PATH,
        len(manager.catalog),
    )
    yield
    # Players still connected at shutdown never get a leave signal
    manager.save_all()


app = FastAPI(title="Pet Inventory API", version=API_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _extract_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "").strip()
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip()
    return request.headers.get("X-API-Key", "").strip()


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    if request.method.upper() == "OPTIONS":
        return await call_next(request)
    if not API_TOKEN:
        return await call_next(request)
    path = request.url.path or ""
    if path in ("/", "/health"):
        return await call_next(request)
    if DEV_MODE and (path.startswith("/docs") or path.startswith("/redoc") or path.startswith("/openapi")):
        return await call_next(request)

    provided = _extract_token(request)
    if provided != API_TOKEN:
        error_response = create_error_response(
            error_code="AUTH_HTTP_401",
            message="Unauthorized",
            node="api",
            details={"path": path},
        )
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=error_response)
    return await call_next(request)


def _node_for_path(path: str) -> str:
    if path.startswith("/inventory"):
        return "inventory"
    if path.startswith("/sessions"):
        return "session"
    if path.startswith("/pets"):
        return "catalog"
    return "api"


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTPExceptions with structured error responses."""
    node = _node_for_path(request.url.path)
    error_response = create_error_response(
        error_code=f"{node.upper()}_HTTP_{exc.status_code}",
        message=exc.detail,
        node=node,
        details={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=error_response)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler: return structured error responses with logging."""
    player_id = None
    if hasattr(request, "path_params") and "player_id" in request.path_params:
        player_id = request.path_params.get("player_id")

    node = _node_for_path(request.url.path)

    log_error_with_context(
        error=exc,
        node_name=node,
        player_id=player_id,
        operation=request.url.path,
        extra_context={
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
        },
    )

    message = str(exc) or f"An error occurred: {type(exc).__name__}"
    error_response = create_error_response(
        error_code=f"{node.upper()}_ERROR",
        message=message,
        node=node,
        details={
            "exception_type": type(exc).__name__,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_response)


app.include_router(inventory_api.router)


@app.get("/")
async def root():
    return {"message": "Pet Inventory API", "version": API_VERSION}


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.get("/health/detail")
async def health_detail(request: Request):
    """Structured readiness diagnostics for deployment checks."""
    diag = _collect_environment_diagnostics(request)
    return {"status": "healthy" if diag.get("ok") else "degraded", **diag}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
