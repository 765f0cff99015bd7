import os

BOOKING_CORE_ROOT_DIR = os.getenv("DFW_ROOT_FOLDER", os.path.dirname(os.path.abspath(__file__)))
DEFAULT_API_URL = os.getenv("DFW_API_URL", "http://localhost:5000/api")
DEFAULT_SESSION_FILE = os.getenv(
    "DFW_SESSION_FILE",
    os.path.join(os.path.expanduser("~"), ".dfw_parking", "session.json"),
)
