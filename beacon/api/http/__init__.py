from beacon.api.http.health import router as health_router
from beacon.api.http.pages import router as pages_router
from beacon.api.http.theme import router as theme_router
from beacon.api.http.storage import router as storage_router
from beacon.api.http.exchange import router as exchange_router

__all__ = [
    "health_router",
    "pages_router",
    "theme_router",
    "storage_router",
    "exchange_router"
]
