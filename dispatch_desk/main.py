import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings, validate_environment
from .routes import api_router

logger = logging.getLogger(__name__)

validate_environment(settings)

app = FastAPI(title="dispatch_desk", debug=settings.debug)

allowed_origins = [origin for origin in settings.cors_origins if origin]
if settings.frontend_url:
    allowed_origins.append(settings.frontend_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_origin_regex=settings.cors_origin_regex or None,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
    expose_headers=["Content-Length", "Content-Type"],
)

app.include_router(api_router)

logger.info("dispatch_desk starting in %s mode", settings.environment)


@app.get("/health", tags=["health"])
def health_check() -> dict:
    return {"status": "ok"}


@app.get("/", tags=["health"])
def index() -> dict:
    return {"service": "dispatch_desk", "status": "running"}
