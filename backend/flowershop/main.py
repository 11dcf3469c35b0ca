from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
import logging
import os

from flowershop.api import admin, auth, cart, catalog, checkout, florist, orders
from flowershop.api.deps import set_session_cookie
from flowershop.db.session import init_db
from flowershop.errors import AccessDenied, InvalidInput, NotFound
from flowershop.services.catalog import seed_catalog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Flower Shop")

# CORS for the storefront frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(catalog.router, prefix="", tags=["catalog"])
app.include_router(cart.router, prefix="/cart", tags=["cart"])
app.include_router(auth.router, prefix="", tags=["auth"])
app.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
app.include_router(orders.router, prefix="/orders", tags=["orders"])
app.include_router(florist.router, prefix="/florist", tags=["florist"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.warning("Rejected %s %s: %s %s", request.method, request.url.path, exc.message, exc.fields)
    return JSONResponse(status_code=422, content={"detail": exc.message, "fields": exc.fields})


@app.exception_handler(AccessDenied)
async def access_denied_handler(request: Request, exc: AccessDenied):
    redirect = RedirectResponse(url=exc.redirect_to, status_code=303)
    # a visitor who arrived without a session keeps the id minted for this request
    new_sid = getattr(request.state, "new_session_id", None)
    if new_sid:
        set_session_cookie(redirect, new_sid)
    return redirect


@app.on_event("startup")
def on_startup():
    init_db()
    seed_catalog()


@app.get("/")
async def root():
    return {"status": "ok", "service": "flower-shop"}
