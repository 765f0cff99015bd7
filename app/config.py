# config.py
from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()  # This will load from .env file by default
environment = os.getenv('ENVIRONMENT', 'local')

if environment == 'development':
    load_dotenv('.env.development')
elif environment == 'product':
    load_dotenv('.env.product')
else:
    load_dotenv('.env.local')


def parse_duration(value: str) -> int:
    """
    Converts a token lifetime such as "7d", "12h", "30m" or "3600" into seconds.
    """
    value = (value or "").strip().lower()
    if not value:
        raise ValueError("Duration must not be empty")

    units = {"s": 1, "m": 60, "h": 3600, "d": 86400}
    if value[-1] in units:
        return int(value[:-1]) * units[value[-1]]
    return int(value)


PORT = int(os.getenv('PORT', '5000'))

JWT_SECRET = os.getenv('JWT_SECRET', 'dfw-parking-dev-secret')
JWT_EXPIRE = os.getenv('JWT_EXPIRE', '7d')
JWT_EXPIRE_SECONDS = parse_duration(JWT_EXPIRE)

CORS_ORIGIN = [origin.strip() for origin in os.getenv('CORS_ORIGIN', 'http://localhost:3000').split(',') if origin.strip()]

RATE_LIMIT_WINDOW_MS = int(os.getenv('RATE_LIMIT_WINDOW_MS', str(15 * 60 * 1000)))
RATE_LIMIT_MAX_REQUESTS = int(os.getenv('RATE_LIMIT_MAX_REQUESTS', '100'))

UPLOAD_PATH = os.getenv('UPLOAD_PATH', 'uploads')

APP_VERSION = os.getenv('APP_VERSION', '1.0.0')
