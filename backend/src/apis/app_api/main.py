"""
Blog Console Service

Handles:
1. Console user administration (create, update, remove, role change, listing)
2. Health checks
"""

from pathlib import Path
from dotenv import load_dotenv
import os

# Load .env file from backend/src directory (parent of apis/)
env_path = Path(__file__).parent.parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

# Set up logging
logging.basicConfig(
    level=getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Lifespan event handler (replaces on_event)
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("=== Blog Console API Starting ===")
    if os.getenv('ENABLE_AUTHENTICATION', 'true').lower() != 'true':
        logger.warning("Authentication is disabled - every caller is treated as an administrator")

    yield  # Application is running

    # Shutdown
    logger.info("=== Blog Console API Shutting Down ===")


# Create FastAPI app with lifespan
app = FastAPI(
    title="Blog Console - API",
    version="1.0.0",
    description="Blog user administration service",
    lifespan=lifespan
)

# Add CORS middleware for local development
if os.getenv('ENVIRONMENT', 'development') == 'development':
    logger.info("Adding CORS middleware for local development")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            origin.strip()
            for origin in os.getenv('CORS_ORIGINS', 'http://localhost:4200').split(',')
            if origin.strip()
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Import routers
from .health import router as health_router
from .console.users import router as console_users_router
# Include routers
app.include_router(health_router)
app.include_router(console_users_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "apis.app_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
