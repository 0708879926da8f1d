from fastapi import APIRouter

from api.routes.system import router as system_router
from modules.heartbeats.api import router as heartbeats_router
from modules.message_threads.api import router as message_threads_router
from modules.messages.api import router as messages_router

# Versioned routes, mounted under settings.server.API_PREFIX by create_app()
v1_router = APIRouter()
v1_router.include_router(messages_router)
v1_router.include_router(message_threads_router)
v1_router.include_router(heartbeats_router)

api_router = APIRouter()
api_router.include_router(system_router)
