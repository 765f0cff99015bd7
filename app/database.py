import logging
import os
import uuid
from datetime import datetime
from urllib.parse import quote

import pytz
from sqlalchemy import JSON, Column, DateTime, String, create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

import app.config

logger = logging.getLogger(__name__)

UTC = pytz.utc

# Marks queries issued by endpoints so the SQL logger can single them out
ENDPOINT_QUERY_MARK = "/* is_endpoint_query */"
db_comment_endpoint = text(f"{ENDPOINT_QUERY_MARK} 1=1")


def build_database_url() -> str:
    url = os.getenv('DATABASE_URL')
    if url:
        return url

    host = os.getenv('db_connection_host')
    if host:
        username = os.getenv('db_connection_username')
        password = os.getenv('db_connection_password', '')
        port = os.getenv('db_connection_port', '3306')
        database = os.getenv('db_connection_database', 'dfw_parking')
        encoded_password = quote(password)
        return f"mysql+pymysql://{username}:{encoded_password}@{host}:{port}/{database}"

    return "sqlite:///./dfw_parking.db"


SQLALCHEMY_DATABASE_URL = build_database_url()

if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        pool_pre_ping=True,
        pool_recycle=3600  # MySQL drops idle connections after wait_timeout
    )
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def utcnow() -> datetime:
    # stored naive; every timestamp in the database is UTC
    return datetime.now(UTC).replace(tzinfo=None)


def new_object_id() -> str:
    return uuid.uuid4().hex


class SessionStoreBackend(Base):
    __tablename__ = "session_store"

    session_id = Column(String(64), primary_key=True)
    account_id = Column(String(32), index=True, nullable=False)
    session_data = Column(JSON, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow)


# Dependency to get DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


def create_tables():
    # model modules register their tables on Base when imported
    from app.model import model_user, model_hotel, model_parking, model_booking, model_support  # noqa: F401
    Base.metadata.create_all(bind=engine)


def check_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def database_host() -> str:
    return engine.url.host or engine.url.database or "unknown"


def count_rows(db: Session, model) -> int:
    return db.query(model).filter(db_comment_endpoint).count()
