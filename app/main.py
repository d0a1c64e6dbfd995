import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.cors import cors_headers, install_cors
from app.api.v1.evaluations import router as evaluations_router
from app.api.v1.schemas import ErrorResponseSchema
from app.core.config import settings
from app.wiring.dependencies import get_record_store

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("question_id", "user_id", "score", "match_ratio", "table", "status", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Misconfigured stores fail the startup, not the first request.
    store = get_record_store()
    logger.info("Starting evaluator (ENV=%s, store=%s)", settings.ENV, type(store).__name__)
    yield


app = FastAPI(title="Classroom Answer Evaluator", version="1.0.0", lifespan=lifespan)

install_cors(app)
app.include_router(evaluations_router, tags=["evaluations"])


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside the CORS middleware, so the headers are set here.
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, extra={"error": str(exc)})
    body = ErrorResponseSchema(error="Internal server error", details=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True), headers=cors_headers())


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
