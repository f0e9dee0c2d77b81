import logging
import os
import sys

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from core.config import settings
from db.database import Base, engine
from models import column, offer  # noqa: F401  registers the tables
from routers import column_router, comparison_router, display_router, offer_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize the database
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Vacation Offers Comparison")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies and query strings are client errors, reported as 400
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# First, mount the API routes with a prefix
app.include_router(column_router.router, prefix="/api")
app.include_router(offer_router.router, prefix="/api")
app.include_router(display_router.router, prefix="/api")
app.include_router(comparison_router.router, prefix="/api")


@app.get("/health")
def health():
    return {"ok": True}


# Determine the absolute path to the frontend build
if settings.FRONTEND_BUILD_DIR:
    frontend_build_dir = settings.FRONTEND_BUILD_DIR
else:
    if getattr(sys, "frozen", False):
        # If the application is run as a bundle (PyInstaller)
        base_path = sys._MEIPASS
    else:
        base_path = os.path.dirname(os.path.abspath(__file__))
    frontend_build_dir = os.path.join(base_path, "frontend", "build")

static_dir = os.path.join(frontend_build_dir, "static")
if os.path.isdir(static_dir):
    app.mount("/static", StaticFiles(directory=static_dir), name="static")
else:
    logger.info("No frontend build in %s, serving the API only", frontend_build_dir)


@app.get("/{full_path:path}")
async def serve_react(full_path: str):
    index_file = os.path.join(frontend_build_dir, "index.html")
    if full_path.startswith("api/") or not os.path.isfile(index_file):
        return JSONResponse(status_code=404, content={"detail": "Not Found"})
    return FileResponse(index_file)
