"""
FastAPI application entry point for the Excel assistant service
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uvicorn
import logging

from excel_assistant import __version__
from excel_assistant.core.config import settings
from excel_assistant.core.exceptions import AssistantError
from excel_assistant.core.logging_config import setup_logging
from excel_assistant.core.responses import ResponseBuilder
from excel_assistant.api import router as api_router
from excel_assistant.api.v1 import relay
from excel_assistant.api.v1.health import health_payload

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events
    """
    logger.info("Starting Excel assistant service...")
    if not settings.ANTHROPIC_API_KEY:
        logger.info("ANTHROPIC_API_KEY not set; requests must carry their own key")

    yield

    logger.info("Excel assistant service stopped")


app = FastAPI(
    title="Excel Assistant Service",
    description="Turns model replies into spreadsheet columns, formulas and tables",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(AssistantError)
async def assistant_error_handler(request: Request, exc: AssistantError):
    logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content=ResponseBuilder.from_exception(exc))


app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(relay.router, prefix="/api", tags=["relay"])


@app.get("/health")
async def health_check():
    """Root health check"""
    return health_payload()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
