# Main application file



import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.database import engine, Base
from app.core.rate_limiter import limiter
from app.core.config import settings
from app.core.errors import BizViewError, ValidationError
from app.models import (  # noqa: F401  registers every table on Base.metadata
    account_settings,
    appointments,
    business,
    expenses,
    finished_products,
    flavors,
    purchases,
    raw_materials,
    recipe_items,
    revenues,
    sales,
    users,
)
from app.routers import (
    auth,
    raw_materials as raw_materials_router,
    finished_products as finished_products_router,
    sales as sales_router,
    purchases as purchases_router,
    revenues as revenues_router,
    expenses as expenses_router,
    cash_flow,
    reports,
    dashboard,
    settings as settings_router,
    appointments as appointments_router,
    ai,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# DATABASE (development bootstrap, alembic owns versioned changes)

Base.metadata.create_all(bind=engine)


# APP INIT

app = FastAPI(
    title="BizView API",
    description="Small-business management: inventory, production, sales, cash flow and AI suggestions",
    version="1.0.0",
)


# CORS (cookie session)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# DOMAIN ERRORS

@app.exception_handler(BizViewError)
async def bizview_error_handler(request: Request, exc: BizViewError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


# Request bodies and query strings that fail schema validation

def _describe_validation_errors(errors) -> str:
    messages = []
    for error in errors:
        field = ".".join(
            str(part) for part in error["loc"] if part not in ("body", "query", "path")
        )
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(messages) or "Invalid request."


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return await bizview_error_handler(
        request, ValidationError(_describe_validation_errors(exc.errors()))
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
app.include_router(raw_materials_router.router)
app.include_router(finished_products_router.router)
app.include_router(sales_router.router)
app.include_router(purchases_router.router)
app.include_router(revenues_router.router)
app.include_router(expenses_router.router)
app.include_router(cash_flow.router)
app.include_router(reports.router)
app.include_router(dashboard.router)
app.include_router(settings_router.router)
app.include_router(appointments_router.router)
app.include_router(ai.router)


# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "BizView API is running"}
