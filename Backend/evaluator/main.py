# Backend/evaluator/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .db.session import init_db
from .errors import EvaluatorError, ScoreValidationError, StorageUnavailableError
from .logging_config import LoggingConfig
from .routers import analytics, candidates, health, leaderboard, prompts, search, share

logger = LoggingConfig.setup_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        init_db()
    yield


app = FastAPI(
    title="Candidate Evaluator API",
    description="API for the candidate evaluation dashboard: rubrics, scores, leaderboards and shared profiles.",
    version="0.1.0",
    lifespan=lifespan,
)

# --- CORS Middleware Configuration ---
origins = [
    settings.FRONTEND_BASE_URL,
    "http://localhost:5173",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error Handlers ---
@app.exception_handler(EvaluatorError)
async def evaluator_error_handler(request: Request, exc: EvaluatorError):
    content = {"error": exc.kind, "detail": exc.message}
    if isinstance(exc, ScoreValidationError):
        content["reasons"] = exc.reasons
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # The driver message stays in the log; callers only learn the kind.
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    error = StorageUnavailableError("Storage is temporarily unavailable")
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.kind, "detail": error.message},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "InternalError", "detail": "Internal server error"},
    )


# --- API Routers ---
app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(prompts.router, prefix=settings.API_PREFIX)
app.include_router(leaderboard.router, prefix=settings.API_PREFIX)
app.include_router(candidates.router, prefix=settings.API_PREFIX)
app.include_router(share.router, prefix=settings.API_PREFIX)
app.include_router(search.router, prefix=settings.API_PREFIX)
app.include_router(analytics.router, prefix=settings.API_PREFIX)
