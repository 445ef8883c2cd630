# contact_relay/router/routers.py

from fastapi import FastAPI
from contact_relay.modules.contact.contact_controller import router as contact_router
from contact_relay.modules.health.health_controller import router as health_router

def include_routers(app: FastAPI) -> None:
    app.include_router(health_router)
    app.include_router(contact_router)
