import os

import psutil
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_memory_usage():
    process = psutil.Process(os.getpid())
    mem_info = process.memory_info()
    return {
        "rss": mem_info.rss,
        "vms": mem_info.vms,
    }


def parse_address(address: str) -> dict:
    """
    Splits a free-form "line1, city, state, zip" address. Missing parts fall
    back to the airport's own address.
    """
    parts = [part.strip() for part in address.split(",")]
    parts += [""] * (4 - len(parts))
    return {
        "line1": parts[0] or "Airport Drive",
        "line2": "",
        "city": parts[1] or "Dallas",
        "state": parts[2] or "TX",
        "zipCode": parts[3] or "75261",
        "country": "USA",
    }


def spot_number(index: int) -> str:
    """Spot labels run A-01..A-20, B-01..B-20 and so on, for a 1-based index."""
    row = chr(ord("A") + (index - 1) // 20)
    return f"{row}-{(index % 20 or 20):02d}"
