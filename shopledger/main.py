from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from shopledger.config import Settings, get_settings
from shopledger.core.logging import setup_logging
from shopledger.database import Base, engine
from shopledger.models import import_all_models
from shopledger.routers import (
    dashboard_router,
    expenses_router,
    health_router,
    inventory_router,
    sales_router,
    users_router,
)

setup_logging()
settings: Settings = get_settings()

import_all_models()
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.APP_NAME)

app.include_router(health_router)
app.include_router(inventory_router)
app.include_router(sales_router)
app.include_router(expenses_router)
app.include_router(dashboard_router)
app.include_router(users_router)


@app.get("/")
def root():
    return RedirectResponse(url="/docs", status_code=302)


__all__ = ["app", "root"]
