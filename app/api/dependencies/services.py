"""FastAPI dependencies resolving services from the application container.

Usage:
    from api.dependencies.services import MessageServiceDep

    @router.post("/send")
    def send_message(payload: MessageSendRequest, service: MessageServiceDep):
        return service.send_message(...)
"""

from typing import Annotated

from fastapi import Depends, Request

from modules.heartbeats.service import HeartbeatService
from modules.message_threads.service import MessageThreadService
from modules.messages.service import MessageService
from server.container import Container


def get_container(request: Request) -> Container:
    """Get the container built by create_app()."""
    return request.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]


def get_message_service(container: ContainerDep) -> MessageService:
    return container.message_service()


def get_message_thread_service(container: ContainerDep) -> MessageThreadService:
    return container.message_thread_service()


def get_heartbeat_service(container: ContainerDep) -> HeartbeatService:
    return container.heartbeat_service()


MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
MessageThreadServiceDep = Annotated[
    MessageThreadService, Depends(get_message_thread_service)
]
HeartbeatServiceDep = Annotated[HeartbeatService, Depends(get_heartbeat_service)]
