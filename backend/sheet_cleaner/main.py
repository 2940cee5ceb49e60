from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sheet_cleaner.core.config import settings
from sheet_cleaner.core.logging_config import setup_logging
from sheet_cleaner.api import clean, health

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Rows-In", "X-Rows-Out", "X-Columns-Out"],
)

# Include routers
app.include_router(health.router, prefix=settings.API_PREFIX, tags=["health"])
app.include_router(clean.router, prefix=settings.API_PREFIX, tags=["clean"])


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }
