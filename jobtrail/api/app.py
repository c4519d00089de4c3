"""FastAPI server for the JobTrail extension popup"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobtrail.api.routes.dashboard import router as dashboard_router
from jobtrail.api.routes.health import router as health_router
from jobtrail.api.routes.threads import router as threads_router
from jobtrail.api.routes.threads import set_thread_grouper
from jobtrail.config import (
    API_HOST,
    API_PORT,
    APP_ENV,
    APP_NAME,
    APP_VERSION,
    DEV_EXTENSION_ID,
    EXTENSION_ID,
)
from jobtrail.observability.logging import get_logger
from jobtrail.observability.telemetry import counter, log_event
from jobtrail.threads.grouper import get_default_grouper
from jobtrail.utils.redaction import redact

logger = get_logger(__name__)

app = FastAPI(title=APP_NAME, version=APP_VERSION)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Validation error handler that only exposes field names to clients.

    Side Effects:
        - Logs validation errors (URL redacted)
        - Increments validation error counter
    """
    errors = exc.errors()
    logger.warning(
        "Validation error on %s: %d error(s) in %s",
        redact(str(request.url)),
        len(errors),
        [str(err["loc"][-1]) for err in errors if err.get("loc")],
    )
    counter("api.validation_errors")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Invalid request format. Please check your request and try again.",
            "error_count": len(errors),
            "invalid_fields": [str(err["loc"][-1]) for err in errors if err.get("loc")],
        },
    )


# CORS - the popup calls from its chrome-extension:// origin
ALLOWED_ORIGINS: list[str] = []

if EXTENSION_ID:
    ALLOWED_ORIGINS.append(f"chrome-extension://{EXTENSION_ID}")

# Allow localhost and the unpacked extension in development only
if APP_ENV == "development":
    ALLOWED_ORIGINS.extend(
        [
            "http://localhost:3000",
            "http://localhost:8000",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:8000",
        ]
    )
    if DEV_EXTENSION_ID:
        ALLOWED_ORIGINS.append(f"chrome-extension://{DEV_EXTENSION_ID}")
elif not EXTENSION_ID:
    logger.warning("JOBTRAIL_EXTENSION_ID not set; the extension origin will be rejected by CORS")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

# Build the grouper once at import; a malformed rules file fails startup
set_thread_grouper(get_default_grouper())

app.include_router(health_router)
app.include_router(threads_router)
app.include_router(dashboard_router)

log_event("api.startup", service="jobtrail", version=APP_VERSION, env=APP_ENV)


@app.get("/")
def root() -> dict[str, Any]:
    return {
        "service": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
        "endpoints": {
            "group": "/api/threads/group",
            "count": "/api/threads/count",
            "stats": "/api/dashboard/stats",
            "followups": "/api/dashboard/followups",
            "conversations": "/api/conversations",
        },
    }


def main() -> None:
    """Run the API with uvicorn (console script entry point)."""
    import uvicorn

    uvicorn.run(
        "jobtrail.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=APP_ENV == "development",
    )


if __name__ == "__main__":
    main()
