# modules/heartbeats/api.py
"""HTTP routes for heartbeats."""

from fastapi import APIRouter, Query

from api.dependencies.services import HeartbeatServiceDep
from api.responses import format_success
from api.schemas import MAX_PAGE_LIMIT, PHONE_NUMBER_PATTERN, ApiResponse
from infrastructure.persistence import utcnow
from modules.heartbeats.schemas import HeartbeatResponse, HeartbeatStoreRequest
from modules.heartbeats.service import HeartbeatStoreParams

router = APIRouter(prefix="/heartbeats", tags=["Heartbeats"])


@router.post("", response_model=ApiResponse)
def store_heartbeat(payload: HeartbeatStoreRequest, service: HeartbeatServiceDep):
    """Record that the owner's phone is online."""
    heartbeat = service.store(
        HeartbeatStoreParams(
            owner=payload.owner, quantity=payload.quantity, timestamp=utcnow()
        )
    )
    return format_success(
        "heartbeat stored successfully", HeartbeatResponse.model_validate(heartbeat)
    )


@router.get("", response_model=ApiResponse)
def get_heartbeats(
    service: HeartbeatServiceDep,
    owner: str = Query(..., pattern=PHONE_NUMBER_PATTERN),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=MAX_PAGE_LIMIT),
):
    """Heartbeats of the owner's phone, newest first."""
    heartbeats = service.index(owner, skip, limit)
    return format_success(
        f"fetched {len(heartbeats)} heartbeats",
        [HeartbeatResponse.model_validate(h) for h in heartbeats],
    )
