"""
Hockey Gamebook - FastAPI Application

REST API for recording hockey game lineups, opponent rosters and scores.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .api.routes import router as games_router
from .storage import get_game_store, reset_game_store, DatabaseError

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("[*] Opening game store...")
    try:
        store = get_game_store()
        logger.info("[+] Game store ready (healthy: %s)", store.health_check())
    except DatabaseError as e:
        # Requests will report the store as unavailable until it is fixed
        logger.error("[!] Game store unavailable: %s", e)

    logger.info("[*] App is ready.")

    yield

    logger.info("[*] Shutting down...")
    reset_game_store()


app = FastAPI(
    title="Hockey Gamebook",
    description="Game lineups, opponent rosters and scores for hockey teams",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Report HTTP errors as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies or query parameters are client errors."""
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


app.include_router(games_router, prefix=config.API_PREFIX)


@app.get("/")
async def home():
    """API banner."""
    return {"message": "Hockey Gamebook API Server"}


@app.get(f"{config.API_PREFIX}/health")
def health():
    """Health check endpoint."""
    try:
        database = get_game_store().health_check()
    except DatabaseError as e:
        logger.error(f"Health check could not open game store: {e}")
        database = False

    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
    }


# Run with: uvicorn gamebook.main:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("gamebook.main:app", host=config.HOST, port=config.PORT, reload=config.RELOAD)
