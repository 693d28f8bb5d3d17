"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.auth.sessions import SessionStore
from app.config import get_settings
from app.db.database import SessionLocal, init_db

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events.

    Args:
        app: FastAPI application instance.
    """
    # Startup
    init_db()
    db = SessionLocal()
    try:
        SessionStore(db).purge_expired()
    except SQLAlchemyError:
        logger.warning("Could not purge expired sessions; is the schema migrated?", exc_info=True)
    finally:
        db.close()
    yield
    # Shutdown (cleanup if needed)


app = FastAPI(
    title=settings.app_name,
    description="Herd management for livestock farms: animals, fields, health and breeding records",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide their details from the client."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Import and include routers
from app.admin.router import router as admin_router
from app.animals.router import router as animals_router
from app.auth.router import router as auth_router
from app.calving.router import router as calving_router
from app.events.router import router as events_router
from app.fields.router import router as fields_router
from app.imports.router import router as imports_router
from app.movements.router import router as movements_router
from app.properties.router import router as properties_router
from app.slaughter.router import router as slaughter_router
from app.vaccinations.router import router as vaccinations_router

# API routes
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(animals_router, prefix="/api/animals", tags=["animals"])
app.include_router(properties_router, prefix="/api/properties", tags=["properties"])
app.include_router(fields_router, prefix="/api/fields", tags=["fields"])
app.include_router(movements_router, prefix="/api/movements", tags=["movements"])
app.include_router(vaccinations_router, prefix="/api/vaccinations", tags=["vaccinations"])
app.include_router(events_router, prefix="/api/events", tags=["events"])
app.include_router(calving_router, prefix="/api/calving-records", tags=["calving"])
app.include_router(slaughter_router, prefix="/api/slaughter-records", tags=["slaughter"])
app.include_router(imports_router, prefix="/api/import", tags=["import"])
app.include_router(admin_router, prefix="/api/admin", tags=["admin"])


@app.get("/health")
async def health_check():
    """Health check endpoint for Docker/Kubernetes.

    Returns:
        dict: Health status.
    """
    return {"status": "healthy", "app": settings.app_name}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
