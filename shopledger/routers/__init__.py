from shopledger.routers.dashboard import router as dashboard_router
from shopledger.routers.expenses import router as expenses_router
from shopledger.routers.health import router as health_router
from shopledger.routers.inventory import router as inventory_router
from shopledger.routers.sales import router as sales_router
from shopledger.routers.users import router as users_router

__all__ = [
    "dashboard_router",
    "expenses_router",
    "health_router",
    "inventory_router",
    "sales_router",
    "users_router",
]
