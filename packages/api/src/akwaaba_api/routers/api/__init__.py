from fastapi import APIRouter

from akwaaba_api.routers.api import (
    admin_agents,
    admin_properties,
    admin_system,
    agents,
    auth,
    inquiries,
    profile,
    properties,
    seller,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(profile.router)
api_router.include_router(properties.router)
api_router.include_router(agents.router)
api_router.include_router(inquiries.router)
api_router.include_router(seller.router)
api_router.include_router(admin_agents.router)
api_router.include_router(admin_properties.router)
api_router.include_router(admin_system.router)
