import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from profitlens.middleware import RequestIdMiddleware
from profitlens.db import Base, engine
from profitlens.config import settings
from profitlens import models  # noqa: F401  registers tables
from profitlens.services.workspace import Workspace

from profitlens.routers import outlets, inventory, menu, sales, costs, waste
from profitlens.routers import suppliers, orders, campaigns, reports, notifications, workspace, users

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("profitlens")

app = FastAPI(title="ProfitLens API", version="0.1.0")
app.state.workspace = Workspace()

@app.on_event("startup")
def init_db():
    Base.metadata.create_all(bind=engine)
    logger.info("profitlens started (env=%s)", settings.APP_ENV)

@app.exception_handler(SQLAlchemyError)
async def store_error(request: Request, exc: SQLAlchemyError):
    logger.error("store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "store error"})

# Middlewares
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Workspace & master data
app.include_router(workspace.router)
app.include_router(outlets.router)
app.include_router(users.router)

# Inventory, menu & purchasing
app.include_router(inventory.router)
app.include_router(menu.router)
app.include_router(suppliers.router)
app.include_router(orders.router)

# Day-to-day bookkeeping
app.include_router(sales.router)
app.include_router(costs.router)
app.include_router(waste.router)

# Reporting
app.include_router(reports.router)
app.include_router(notifications.router)
app.include_router(campaigns.router)

@app.get("/healthz")
def healthz():
    return {"ok": True}
