import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings, validate_settings
from exceptions import ConfigurationError, ResumizeError
from routers import health
from routers.auth import router as auth_router
from routers.ats import router as ats_router
from routers.builder import router as builder_router
from routers.generate import router as generate_router
from routers.resumes import router as resumes_router
from routers.templates import router as templates_router
from schemas.responses import ErrorResponse
from services.builder.session_manager import get_session_manager
from services.datastore.client import get_supabase_client
from services.email.client import get_email_client

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
CLEANUP_INTERVAL_SECONDS = 300


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


async def _cleanup_sessions(max_age_minutes: int) -> None:
    manager = get_session_manager()
    while True:
        await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
        manager.cleanup_expired(max_age_minutes)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        validate_settings(settings)
    except ConfigurationError as e:
        logger.critical(f"{e.message}. Set them in the environment or .env file.")
        raise

    cleanup = asyncio.create_task(_cleanup_sessions(settings.session_timeout_minutes))
    logger.info(f"Resumize backend started (llm provider: {settings.llm_provider})")
    try:
        yield
    finally:
        cleanup.cancel()
        await get_supabase_client().aclose()
        await get_email_client().aclose()


app = FastAPI(
    title="Resumize API",
    description="Resume builder backend: templates, AI generation, ATS analysis and PDF export",
    version="2.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(ResumizeError)
async def resumize_error_handler(request: Request, exc: ResumizeError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code}: {exc.message}")
    body = ErrorResponse(error_code=exc.error_code, message=exc.message, details=exc.details or None)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Include routers
app.include_router(health.router, prefix="/health")
app.include_router(auth_router)
app.include_router(templates_router)
app.include_router(builder_router)
app.include_router(generate_router)
app.include_router(ats_router)
app.include_router(resumes_router)


@app.get("/")
def root():
    return {"message": "Resumize backend is running...."}
