"""Health check route."""

from fastapi import APIRouter

from web.models import HealthResponse
from web.service import health

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def get_health():
    return health()
