from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from pawpost.core.config import settings
from pawpost.core.logging import setup_logging
from pawpost.core.exceptions import (
    PawPostError,
    app_exception_handler,
    global_exception_handler,
    http_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)
from pawpost.db.init_db import init_models

# Setup Logging
setup_logging()
logger = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle manager for the application.
    """
    logger.info("startup", project=settings.PROJECT_NAME, environment=settings.ENVIRONMENT)
    await init_models()
    yield
    logger.info("shutdown")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Rescue posts, fraud warnings and animal-welfare incident tracking",
    lifespan=lifespan,
    docs_url=f"{settings.API_PREFIX}/docs",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

# Middleware: CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Exception Handlers
app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(SQLAlchemyError, store_exception_handler)
app.add_exception_handler(PawPostError, app_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Health Check
@app.get("/health", tags=["system"])
@app.get(f"{settings.API_PREFIX}/health", tags=["system"], include_in_schema=False)
async def health_check():
    """
    Public health check endpoint for load balancers.
    """
    return {"status": "ok", "environment": settings.ENVIRONMENT}


from pawpost.api.v1 import posts, templates, incidents, evidence, timeline, cross_references  # noqa: E402

app.include_router(posts.router, prefix=f"{settings.API_PREFIX}/posts", tags=["posts"])
app.include_router(templates.router, prefix=f"{settings.API_PREFIX}/templates", tags=["templates"])
app.include_router(incidents.router, prefix=f"{settings.API_PREFIX}/incidents", tags=["incidents"])
app.include_router(evidence.incident_router, prefix=f"{settings.API_PREFIX}/incidents", tags=["evidence"])
app.include_router(timeline.incident_router, prefix=f"{settings.API_PREFIX}/incidents", tags=["timeline"])
app.include_router(cross_references.incident_router, prefix=f"{settings.API_PREFIX}/incidents", tags=["cross-references"])
app.include_router(evidence.router, prefix=f"{settings.API_PREFIX}/evidence", tags=["evidence"])
app.include_router(timeline.router, prefix=f"{settings.API_PREFIX}/timeline", tags=["timeline"])
app.include_router(cross_references.router, prefix=f"{settings.API_PREFIX}/cross-references", tags=["cross-references"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("pawpost.main:app", host="0.0.0.0", port=8000, reload=True)
