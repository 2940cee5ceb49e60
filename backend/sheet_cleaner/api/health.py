from fastapi import APIRouter
from sheet_cleaner.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint - the engine has no external dependencies to probe."""
    return {
        "status": "healthy",
        "version": settings.VERSION,
    }
