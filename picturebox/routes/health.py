from datetime import datetime, timezone

from fastapi import APIRouter

from picturebox.models.health import HealthStatus

router = APIRouter(tags=["health"])


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(status="ok", timestamp=utc_timestamp())
