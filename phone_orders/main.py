"""
FastAPI Application Entry Point

Phone Order Relay - receives phone orders from the voice assistant webhook,
stores them in SQLite, prints kitchen tickets and serves the API polled by
the kitchen dashboard.

Endpoints:
    - POST /api/orders: Order intake (voice assistant webhook)
    - GET /api/orders: List orders (dashboard polling)
    - GET /api/orders/{id}: Single order
    - PATCH /api/orders/{id}: Update order status
    - POST /api/orders/{id}/reprint: Send an order to the printer again
    - GET /health: System health check

Run:
    uvicorn phone_orders.main:app --port 3000
"""

import logging
from datetime import datetime
from typing import Optional
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from phone_orders.core.config import get_settings, setup_logging
from phone_orders.database import get_db, init_db, dispose_engine
from phone_orders.schemas import (
    OrderCreate,
    OrderResponse,
    OrderCreateResponse,
    StatusUpdate,
    StatusUpdateResponse,
    PrintResultResponse,
    ReprintResponse,
    ErrorResponse,
    HealthResponse,
)
from phone_orders.services.order_store import OrderStore, UpdateResult
from phone_orders.services.printing import (
    PrintDispatcher,
    get_print_channel,
    get_print_dispatcher,
)

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    current = get_settings()

    logger.info("=" * 60)
    logger.info(f"🚀 Starting {current.app_name}")
    logger.info(f"   Version: {current.app_version}")
    logger.info(f"   Port: {current.port}")
    logger.info(f"   Debug: {current.debug}")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")

    channel = get_print_channel()
    logger.info(f"✅ Print method: {channel.name if channel else 'not configured'}")

    missing = current.validate_print_config()
    if missing:
        logger.warning(f"⚠️ Missing print config: {missing}")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    logger.info("Shutting down...")
    await dispose_engine()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Phone order intake with kitchen ticket printing "
        "(PrintNode, webhook) and a polling dashboard API."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_order_store(db: AsyncSession = Depends(get_db)) -> OrderStore:
    """Order store bound to the request's session."""
    return OrderStore(db)


def error_response(
    status_code: int,
    error: str,
    result: Optional[UpdateResult] = None,
) -> JSONResponse:
    """JSON body ``{"success": false, "error": ...}``."""
    body = ErrorResponse(error=error, result=result.value if result else None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    current = get_settings()
    return {
        "message": f"📞 {current.app_name}",
        "version": current.app_version,
        "documentation": "/docs",
        "orders": "/api/orders",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db),
    dispatcher: PrintDispatcher = Depends(get_print_dispatcher),
) -> HealthResponse:
    """Verify the database is reachable and report the print channel."""
    db_status = "healthy"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    return HealthResponse(
        status="operational" if db_status == "healthy" else "degraded",
        database=db_status,
        print_method=dispatcher.channel_name,
        timestamp=datetime.now(),
    )


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@app.post(
    "/api/orders",
    response_model=OrderCreateResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Create Order (voice assistant webhook)",
)
async def create_order(
    order_data: OrderCreate,
    store: OrderStore = Depends(get_order_store),
    dispatcher: PrintDispatcher = Depends(get_print_dispatcher),
):
    """
    Store a phone order and send it to the kitchen printer.

    Printing is best-effort: the response reports success as soon as the
    order is stored, whatever the printer does.
    """
    logger.info(
        f"Received order for {order_data.business_id}: "
        f"{order_data.customer_name}, {len(order_data.items)} item(s)"
    )

    try:
        order = await store.create_order(order_data)
    except Exception as e:
        logger.exception(f"Error processing order: {e}")
        return error_response(500, str(e))

    await dispatcher.dispatch(order.business_id, order)

    return OrderCreateResponse(order=order)


@app.get(
    "/api/orders",
    response_model=list[OrderResponse],
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    business_id: Optional[str] = Query(None, alias="businessId"),
    status: Optional[str] = Query(None),
    store: OrderStore = Depends(get_order_store),
) -> list[OrderResponse]:
    """Most recent orders first (at most 100), optionally filtered."""
    return await store.list_orders(business_id=business_id, status=status)


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: int,
    store: OrderStore = Depends(get_order_store),
):
    """Get a specific order by ID."""
    order = await store.get_order(order_id)
    if order is None:
        return error_response(404, f"Order {order_id} not found")
    return order


@app.patch(
    "/api/orders/{order_id}",
    response_model=StatusUpdateResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Update Order Status",
)
async def update_order_status(
    order_id: str,
    update: StatusUpdate,
    store: OrderStore = Depends(get_order_store),
):
    """
    Set the status of an order.

    By default unknown ids (numeric or not) are acknowledged with
    ``result: not_found`` and any status string is accepted;
    STRICT_STATUS_UPDATES turns both into errors.
    """
    strict = get_settings().strict_status_updates
    result = await store.update_status(order_id, update.status, strict=strict)

    if strict and result == UpdateResult.NOT_FOUND:
        return error_response(404, f"Order {order_id} not found", result)
    if strict and result == UpdateResult.INVALID_STATUS:
        return error_response(422, f"Invalid status: {update.status}", result)

    return StatusUpdateResponse(result=result.value)


@app.post(
    "/api/orders/{order_id}/reprint",
    response_model=ReprintResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Reprint Order",
)
async def reprint_order(
    order_id: int,
    store: OrderStore = Depends(get_order_store),
    dispatcher: PrintDispatcher = Depends(get_print_dispatcher),
):
    """Send a stored order to the kitchen printer again."""
    order = await store.get_order(order_id)
    if order is None:
        return error_response(404, f"Order {order_id} not found")

    logger.info(f"Reprinting order {order.order_number}")
    result = await dispatcher.dispatch(order.business_id, order)

    return ReprintResponse(print_result=PrintResultResponse(**result.to_dict()))


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies in the ``{success, error}`` shape."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    logger.warning(f"Rejected {request.method} {request.url.path}: {problems}")

    body = ErrorResponse(error="Invalid request", detail=problems)
    return JSONResponse(
        status_code=422,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if get_settings().debug else "An unexpected error occurred",
        },
    )


def run() -> None:
    """Start the API server on HOST:PORT."""
    current = get_settings()
    uvicorn.run(
        "phone_orders.main:app",
        host=current.host,
        port=current.port,
        log_level="debug" if current.debug else "info",
    )


if __name__ == "__main__":
    run()
