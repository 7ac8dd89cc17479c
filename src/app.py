"""Harvest Marketplace FastAPI application.

Processes commands synchronously via HTTP. Each request runs inside the
marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from marketplace.domain import marketplace

# PROTEAN_ENV selects the config overlay from marketplace/domain.toml
marketplace.init()

from marketplace.api import (  # noqa: E402
    distributor_router,
    install_exception_handlers,
    order_cycle_router,
    product_router,
    session_router,
)
from marketplace.utils.logging import add_context, clear_context  # noqa: E402

app = FastAPI(
    title="Harvest Marketplace API",
    description="Food distribution marketplace — distributors, order cycles and carts",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the marketplace domain context and bind the request path for logging."""
    add_context(path=request.url.path, method=request.method)
    try:
        with marketplace.domain_context():
            return await call_next(request)
    finally:
        clear_context()


app.include_router(distributor_router)
app.include_router(product_router)
app.include_router(order_cycle_router)
app.include_router(session_router)
install_exception_handlers(app)


@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": marketplace.name})
