# Main application file



import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from asset_inventory.database import engine, Base, SessionLocal
from asset_inventory.core.bootstrap import ensure_default_admin
from asset_inventory.core.rate_limiter import limiter
from asset_inventory.core.config import settings
from asset_inventory.routers import (
    auth,
    users,
    dashboard,
    locations,
    categories,
    suppliers,
    inventory,
    purchases,
    location_history,
    reports,
    exports,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# STARTUP

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic owns the schema; create_all only fills in a fresh database
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_default_admin(db)
    finally:
        db.close()

    logger.info(f"IT Asset Inventory API started ({settings.ENV})")
    yield


# APP INIT

app = FastAPI(
    title="IT Asset Inventory API",
    description="Track IT assets, their locations, suppliers, purchases and transfers",
    version="1.0.0",
    lifespan=lifespan,
)



# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(dashboard.router)
app.include_router(locations.router)
app.include_router(categories.router)
app.include_router(suppliers.router)
app.include_router(inventory.router)
app.include_router(purchases.router)
app.include_router(location_history.router)
app.include_router(reports.router)
app.include_router(exports.router)



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "IT Asset Inventory API is running"}
