from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.routes import convert, overview, health
from asset_converter.config import load_config
from asset_converter.utils.errors import AssetConverterError
from asset_converter.utils.logging import get_logger


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_config()
    yield


app = FastAPI(
    title="Asset Converter API",
    description="Express an amount of one asset in every other supported asset",
    version="0.1.0",
    lifespan=lifespan,
)


# CORS (broad for dev; tighten in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(AssetConverterError)
async def converter_error_handler(request: Request, exc: AssetConverterError):
    logger.info(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


# Routers
app.include_router(convert.router, prefix="/api", tags=["convert"])
app.include_router(overview.router, prefix="/api", tags=["overview"])
app.include_router(health.router, tags=["health"])
