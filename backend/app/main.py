import logging
import time
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(settings.log_dir)
if not _LOG_DIR.is_absolute():
    _LOG_DIR = Path(__file__).resolve().parent.parent / _LOG_DIR
_LOG_DIR.mkdir(parents=True, exist_ok=True)

_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "wayfarer.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from app.database import dispose_engine, init_models
from app.dependencies import close_services
from app.exceptions import WayfarerError
from app.routers import auth, travel, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("Database tables ready")

    yield

    # Shutdown
    await close_services()
    await dispose_engine()
    logger.info("Maps client closed, database engine disposed")


app = FastAPI(
    title="Wayfarer",
    description="Travel planning backend",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.error(f"{request.method} {request.url.path} 500 {elapsed_ms:.1f}ms (unhandled)")
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response


@app.exception_handler(WayfarerError)
async def handle_wayfarer_error(request: Request, exc: WayfarerError):
    if exc.status_code >= 500:
        cause = exc.__cause__
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({cause!r})")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    # Field locations only; inputs may contain credentials
    fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
    logger.info(f"{request.method} {request.url.path} invalid body: {fields}")
    return JSONResponse(status_code=400, content={"detail": "Invalid request body."})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error!"})


app.include_router(auth.router, tags=["auth"])
app.include_router(users.router, tags=["users"])
app.include_router(travel.router, tags=["travel"])


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "wayfarer"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
