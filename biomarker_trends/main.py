import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from biomarker_trends.config import settings
from biomarker_trends.database import engine
from biomarker_trends.models import lab_report  # noqa: F401
from biomarker_trends.routers import biomarkers, trends

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _assert_database_at_head() -> None:
    project_root = Path(__file__).resolve().parent.parent
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    script = ScriptDirectory.from_config(alembic_cfg)
    expected_heads = set(script.get_heads())

    with engine.connect() as connection:
        context = MigrationContext.configure(connection)
        current_heads = set(context.get_current_heads())

    if current_heads != expected_heads:
        raise RuntimeError(
            "Lab result store is not at Alembic head. "
            "Run `alembic upgrade head` before starting the API. "
            f"Current revisions: {sorted(current_heads) or ['<none>']}, "
            f"expected: {sorted(expected_heads)}."
        )


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.check_schema_on_startup:
        _assert_database_at_head()
    logger.info("Biomarker trends API started (env=%s)", settings.app_env)
    yield


app = FastAPI(title="Biomarker Trends API", version="0.1.0", lifespan=lifespan)


# Read-only API, no credentialed requests.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

_ERROR_NAMES = {
    400: "BadRequest",
    404: "NotFound",
    422: "ValidationError",
    500: "InternalServerError",
}


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    content = {"statusCode": status_code, "message": message, "error": _ERROR_NAMES.get(status_code, "HTTPError")}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(HTTPException)
async def http_exception_handler(_: Request, exc: HTTPException):
    return _error_response(exc.status_code, str(exc.detail or "Request failed"))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    # "ctx" may hold the raw exception object, which is not JSON serialisable.
    errors = [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]
    return _error_response(422, "Invalid request payload", details={"errors": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(_: Request, exc: Exception):
    logger.exception("Unhandled error while serving biomarker request")
    return _error_response(500, "An unexpected error occurred")


@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": "biomarker-trends",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(biomarkers.router)
app.include_router(trends.router)
