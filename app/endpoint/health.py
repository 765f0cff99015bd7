import logging
import os
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app import config, database
from app.database import utcnow
from app.model.model_booking import Booking
from app.model.model_hotel import Hotel
from app.model.model_parking import ParkingLot
from app.model.model_user import Account
from app.utils.utils import get_memory_usage

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix="/health", tags=["Health"])

STARTED_AT = time.monotonic()


def timestamp() -> str:
    return utcnow().isoformat() + "Z"


@router.get("")
def health_check():
    connected = database.check_connection()
    status_code = 200 if connected else 503

    return JSONResponse(
        status_code=status_code,
        content={
            "success": connected,
            "timestamp": timestamp(),
            "status": "healthy" if connected else "unhealthy",
            "database": {
                "status": "connected" if connected else "disconnected",
                "connection": database.database_host(),
            },
            "system": {
                "uptime": time.monotonic() - STARTED_AT,
                "memory": get_memory_usage(),
                "pid": os.getpid(),
            },
            "version": config.APP_VERSION,
        },
    )


@router.get("/detailed")
def detailed_health_check(db: Session = Depends(database.get_db)):
    started = time.monotonic()
    connected = database.check_connection()

    tests = {}
    if connected:
        try:
            tests = {
                "users": database.count_rows(db, Account),
                "hotels": database.count_rows(db, Hotel),
                "parkingLots": database.count_rows(db, ParkingLot),
                "bookings": database.count_rows(db, Booking),
            }
        except Exception as e:
            logger.error(f"Health check count failed: {e}")
            db.rollback()
            tests = {"error": str(e)}

    response_time = int((time.monotonic() - started) * 1000)
    return {
        "success": True,
        "timestamp": timestamp(),
        "status": "healthy",
        "responseTime": f"{response_time}ms",
        "database": {
            "status": "connected" if connected else "disconnected",
            "connection": database.database_host(),
            "tests": tests,
        },
        "environment": {
            "environment": config.environment,
            "port": config.PORT,
        },
    }
