# backend/app/main.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .api import api_deposit, api_estimate, api_travel
from .core.config import settings
from .core.observability import setup_logging, setup_tracer
from .service_types.event_staffing import validate_schedule

setup_logging()
logger = logging.getLogger(__name__)

# Surge tables are compiled in; refuse to start with an out-of-range multiplier
# rather than failing individual estimate requests later.
validate_schedule(api_estimate.resolver.schedule)

# Always use ORJSONResponse for JSON payloads to ensure consistent, fast
# serialization across all endpoints.
app = FastAPI(title=settings.PROJECT_NAME, default_response_class=ORJSONResponse)
setup_tracer(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info("CORS origins set to: %s", settings.CORS_ORIGINS)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors with details and log them for debugging."""
    errors = exc.errors()
    logger.warning("Validation error at %s: %s", request.url.path, errors)
    return ORJSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(errors)},
    )


def jsonable_errors(errors) -> list:
    # ctx may hold exception instances which orjson cannot serialize
    cleaned = []
    for err in errors:
        item = dict(err)
        if "ctx" in item:
            item["ctx"] = {k: str(v) for k, v in item["ctx"].items()}
        cleaned.append(item)
    return cleaned


api_prefix = settings.API_V1_STR  # usually something like "/api/v1"

app.include_router(api_estimate.router, prefix=f"{api_prefix}", tags=["estimates"])
app.include_router(api_deposit.router, prefix=f"{api_prefix}", tags=["deposits"])
app.include_router(api_travel.router, prefix=f"{api_prefix}", tags=["travel-fee"])


@app.get("/healthz", tags=["health"])
async def healthz():
    return {"status": "ok"}


# ─── A simple root check ─────────────────────────────────────────────────────────────
@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
