import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from .config import get_settings
from .database import engine
from .routers import documents_router, clinic_settings_router, storage_router
from .utils.migrations import get_migration_state, run_migrations_if_enabled

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Clinic Admin API",
    description="Clinic-scoped document storage and configurable settings",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup() -> None:
    run_migrations_if_enabled(engine)


def _error_content(request: Request, message: str) -> dict:
    # Settings routes use a bare {"error": ...}; document routes add "success"
    if request.url.path.startswith(clinic_settings_router.prefix):
        return {"error": message}
    return {"success": False, "error": message}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    if not location:
        return "Request body is required" if first.get("type") == "missing" else "Invalid request body"
    return f"Invalid value for {'.'.join(location)}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content=_error_content(request, _validation_message(exc)))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=_error_content(request, "Server error"))


app.include_router(documents_router)
app.include_router(clinic_settings_router)
app.include_router(storage_router)


@app.get("/health")
def health_check() -> dict:
    database = "connected"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check database probe failed: {e}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "database": database,
        "storage_backend": settings.storage_backend,
        "migrations": get_migration_state(engine),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
