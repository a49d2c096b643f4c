"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Lightweight liveness check that never touches the scraped sites."""
    return {"status": "ok"}
