import logging
import os
import traceback

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import config, database
from app.logging_config import configure_sql_logging, root_logger
from app.endpoint.admin import router as admin_router
from app.endpoint.bookings import router as bookings_router
from app.endpoint.health import router as health_router
from app.endpoint.hotel.hotel import router as hotel_router
from app.endpoint.login import router as login_router
from app.endpoint.parking import router as parking_router
from app.endpoint.support import router as support_router
from app.endpoint.users import router as user_router
from app.utils.rate_limit import RateLimitMiddleware

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

app = FastAPI(title="DFW Parking API", version=config.APP_VERSION)

os.makedirs(config.UPLOAD_PATH, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=config.UPLOAD_PATH), name="uploads")


@app.on_event("startup")
async def startup_event():
    configure_sql_logging(database.engine)
    database.create_tables()
    root_logger.info(f"DFW Parking API started ({config.environment}) on port {config.PORT}")


app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    RateLimitMiddleware,
    window_ms=config.RATE_LIMIT_WINDOW_MS,
    max_requests=config.RATE_LIMIT_MAX_REQUESTS,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGIN,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path")),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Validation error", "errors": errors},
    )


@app.middleware("http")
async def catch_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        trace_str = traceback.format_exc()
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(e)}")
        logger.error(trace_str)

        content = {
            "success": False,
            "message": f"Unhandled error: {str(e)}",
        }
        # stack traces stay out of production responses
        if config.environment != "product":
            content["traceback"] = trace_str.split("\n")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


app.include_router(login_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(hotel_router, prefix="/api")
app.include_router(parking_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(support_router, prefix="/api")
app.include_router(health_router, prefix="/api")


@app.get("/")
async def root():
    return {"success": True, "message": "DFW Parking API is running"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=config.PORT)
