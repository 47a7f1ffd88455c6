"""FastAPI application entry point.

ScrollNet interaction backend
- Active video feed, newest first, stable pagination
- Interaction upsert per (identity, video, type)
- Insert-only feedback and a server-side cadence check
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scrollnet.config import get_settings
from scrollnet.database import close_db, init_db
from scrollnet.routers import feedback_router, interactions_router, videos_router

# Configure logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting ScrollNet backend...")
    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Shutting down...")
    await close_db()


app = FastAPI(
    title="ScrollNet API",
    description="""
## ScrollNet interaction backend

Thin REST layer behind the swipe feed.

### Endpoints
- **GET /videos**: active videos, newest first (`limit`, `offset`)
- **POST /interactions**: like / dislike / emoji / view, one row per identity, video and type
- **POST /feedback**: feedback form submission (insert-only)
- **GET /feedback/required**: has the identity watched a full cadence since its last feedback

Every response carries a `success` flag; clients treat anything else as a soft failure.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "detail": exc.detail},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"success": False, "detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with non-serializable context (exceptions) dropped."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


app.include_router(videos_router)
app.include_router(interactions_router)
app.include_router(feedback_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "ScrollNet API",
        "version": "0.1.0",
        "status": "healthy",
        "endpoints": {
            "videos": "GET /videos?limit=&offset=",
            "interactions": "POST /interactions",
            "feedback": "POST /feedback",
            "feedback_required": "GET /feedback/required?identityId=",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"success": True, "status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
