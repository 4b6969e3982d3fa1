"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from llmstxt_gen.api.routes import checkout, cleanup, generate, llmstxt, webhooks
from llmstxt_gen.config import get_settings
from llmstxt_gen.log_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(settings.log_level)
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Generate curated llms.txt files from a short site survey",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(generate.router, prefix="/api", tags=["generate"])
app.include_router(llmstxt.router, prefix="/api", tags=["llmstxt"])
app.include_router(checkout.router, prefix="/api", tags=["checkout"])
app.include_router(webhooks.router, prefix="/api")
app.include_router(cleanup.router, prefix="/api", tags=["cleanup"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
    }
