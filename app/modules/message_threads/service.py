"""Message thread service.

Threads are derived state: they are only changed by the message thread
listeners, in reaction to message events.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from infrastructure.events import EventDispatcher, EventPublishingService, EventType
from infrastructure.logging import get_module_logger
from infrastructure.persistence import as_utc
from infrastructure.telemetry import get_tracer
from modules.message_threads.errors import MessageThreadNotFoundError
from modules.message_threads.events import MessageThreadUpdatedPayload
from modules.message_threads.models import MessageThread
from modules.message_threads.repository import MessageThreadRepository

logger = get_module_logger()
tracer = get_tracer(__name__)


@dataclass(frozen=True)
class MessageThreadUpdateParams:
    owner: str
    contact: str
    message_id: str
    content: str
    status: str
    timestamp: datetime


@dataclass(frozen=True)
class MessageThreadStatusParams:
    owner: str
    contact: str
    message_id: str
    status: str
    timestamp: datetime


class MessageThreadService(EventPublishingService):
    """Keeps one thread per (owner, contact) pointing at the latest message."""

    source = "message-threads"

    def __init__(
        self,
        repository: MessageThreadRepository,
        dispatcher: EventDispatcher,
        publish_timeout: Optional[float] = None,
    ):
        super().__init__(dispatcher, publish_timeout)
        self._repository = repository

    def update_thread(self, params: MessageThreadUpdateParams) -> MessageThread:
        """Create the thread or move it to a newer message.

        A message older than the thread's latest message leaves the thread
        unchanged.
        """
        with tracer.start_as_current_span("message_thread_service.update_thread"):
            timestamp = as_utc(params.timestamp)
            thread = self._find(params.owner, params.contact)

            if thread is None:
                thread = self._repository.save(
                    MessageThread(
                        id=str(uuid4()),
                        owner=params.owner,
                        contact=params.contact,
                        last_message_id=params.message_id,
                        last_message_content=params.content,
                        status=params.status,
                        order_timestamp=timestamp,
                    )
                )
                logger.info(
                    "message_thread_created",
                    thread_id=thread.id,
                    owner=thread.owner,
                    message_id=params.message_id,
                )
            elif as_utc(thread.order_timestamp) > timestamp:
                logger.info(
                    "message_thread_update_skipped",
                    thread_id=thread.id,
                    message_id=params.message_id,
                    reason="older_message",
                )
                return thread
            else:
                thread.last_message_id = params.message_id
                thread.last_message_content = params.content
                thread.status = params.status
                thread.order_timestamp = timestamp
                thread = self._repository.update(thread)

            self._publish_updated(thread)
            return thread

    def update_status(self, params: MessageThreadStatusParams) -> Optional[MessageThread]:
        """Copy a message status onto its thread.

        Only applies when the message is still the thread's latest message.
        Returns the updated thread, or None when nothing changed.
        """
        with tracer.start_as_current_span("message_thread_service.update_status"):
            thread = self._find(params.owner, params.contact)
            if thread is None:
                logger.warning(
                    "message_thread_not_found",
                    owner=params.owner,
                    contact=params.contact,
                    message_id=params.message_id,
                )
                return None

            if thread.last_message_id != params.message_id:
                logger.debug(
                    "message_thread_status_skipped",
                    thread_id=thread.id,
                    message_id=params.message_id,
                    last_message_id=thread.last_message_id,
                )
                return None

            thread.status = params.status
            thread = self._repository.update(thread)
            self._publish_updated(thread)
            return thread

    def get_threads(self, owner: str, skip: int, limit: int) -> List[MessageThread]:
        return self._repository.index(owner, skip, limit)

    def _find(self, owner: str, contact: str) -> Optional[MessageThread]:
        try:
            return self._repository.load_by_owner_contact(owner, contact)
        except MessageThreadNotFoundError:
            return None

    def _publish_updated(self, thread: MessageThread) -> None:
        self._publish(
            EventType.MESSAGE_THREAD_UPDATED,
            MessageThreadUpdatedPayload(
                thread_id=thread.id,
                owner=thread.owner,
                contact=thread.contact,
                last_message_id=thread.last_message_id,
                status=thread.status,
                timestamp=thread.order_timestamp,
            ).model_dump(mode="json"),
        )
