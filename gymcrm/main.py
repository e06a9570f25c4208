import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from gymcrm.api.attendance.routes import router as attendance_router
from gymcrm.api.auth.routes import router as auth_router
from gymcrm.api.bookings.routes import router as bookings_router
from gymcrm.api.contact.routes import router as contact_router
from gymcrm.api.customers.routes import router as customers_router
from gymcrm.api.dashboard.routes import router as dashboard_router
from gymcrm.api.deps import SubscriptionExpired, subscription_expired_handler
from gymcrm.api.gym.routes import router as gym_router
from gymcrm.api.invoices.routes import router as invoices_router
from gymcrm.api.membership_plans.routes import router as membership_plans_router
from gymcrm.api.notifications.routes import router as notifications_router
from gymcrm.api.nutrition_plans.routes import router as nutrition_plans_router
from gymcrm.api.payment.routes import router as payment_router
from gymcrm.api.personal_training.routes import router as personal_training_router
from gymcrm.api.staff.routes import router as staff_router
from gymcrm.api.subscription_plans.routes import router as subscription_plans_router
from gymcrm.api.transactions.routes import router as transactions_router
from gymcrm.api.waiver_forms.routes import router as waiver_forms_router
from gymcrm.api.workout_plans.routes import router as workout_plans_router
from gymcrm.core import settings
from gymcrm.core.logging_config import get_logger, setup_logging
from gymcrm.db.postgresql import create_tables

logger = get_logger("app")

ROUTERS = [
    auth_router,
    gym_router,
    customers_router,
    bookings_router,
    invoices_router,
    transactions_router,
    notifications_router,
    attendance_router,
    workout_plans_router,
    nutrition_plans_router,
    staff_router,
    subscription_plans_router,
    payment_router,
    contact_router,
    waiver_forms_router,
    personal_training_router,
    membership_plans_router,
    dashboard_router,
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await create_tables()
        logger.info("Database tables ensured")
    yield


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"success": False, "message": "An error occurred on the server"}
    if settings.is_development():
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="GymCRM API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
        return response

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SubscriptionExpired, subscription_expired_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    for router in ROUTERS:
        app.include_router(router, prefix="/api")

    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    @app.get("/api/health")
    async def health():
        return {"success": True, "status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("gymcrm.main:app", host="0.0.0.0", port=5000, reload=settings.is_development())
