from fastapi import APIRouter

from .audit import router as audit_router
from .auth import router as auth_router
from .catalog import equipment_router, operators_router
from .client_prices import router as client_prices_router
from .clients import router as clients_router
from .companies import router as companies_router
from .config import router as config_router
from .dispatches import router as dispatches_router
from .products import router as products_router
from .trucks import router as trucks_router
from .users import router as users_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(dispatches_router, prefix="/dispatches", tags=["dispatches"])
api_router.include_router(config_router, prefix="/config", tags=["config"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(equipment_router, prefix="/equipment", tags=["equipment"])
api_router.include_router(operators_router, prefix="/operators", tags=["operators"])
api_router.include_router(companies_router, prefix="/companies", tags=["companies"])
api_router.include_router(clients_router, prefix="/clients", tags=["clients"])
api_router.include_router(products_router, prefix="/products", tags=["products"])
api_router.include_router(
    client_prices_router, prefix="/client-prices", tags=["client-prices"]
)
api_router.include_router(trucks_router, prefix="/camiones", tags=["trucks"])
api_router.include_router(audit_router, prefix="/audit", tags=["audit"])
