# modules/message_threads/api.py
"""HTTP routes for message threads."""

from fastapi import APIRouter, Query

from api.dependencies.services import MessageThreadServiceDep
from api.responses import format_success
from api.schemas import MAX_PAGE_LIMIT, PHONE_NUMBER_PATTERN, ApiResponse
from modules.message_threads.schemas import MessageThreadResponse

router = APIRouter(prefix="/message-threads", tags=["Message Threads"])


@router.get("", response_model=ApiResponse)
def get_message_threads(
    service: MessageThreadServiceDep,
    owner: str = Query(..., pattern=PHONE_NUMBER_PATTERN),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=MAX_PAGE_LIMIT),
):
    """Threads of the owner's phone, most recent activity first."""
    threads = service.get_threads(owner, skip, limit)
    return format_success(
        f"fetched {len(threads)} message threads",
        [MessageThreadResponse.model_validate(t) for t in threads],
    )
