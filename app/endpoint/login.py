import logging
from datetime import timedelta
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from pydantic import BaseModel
from sqlalchemy.orm import Session

import app.config
from app import database
from app.database import db_comment_endpoint, get_db, utcnow
from app.model.model_user import Account
from app.models import dump, envelope
from app.schema import schema_user
from app.utils import utils
from booking_core.base import Role

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter()


class SessionData(BaseModel):
    account_id: str
    email: str
    role: str


class DatabaseBackend:
    """Server-side bearer sessions kept in the session_store table."""

    def __init__(self, max_age_seconds: int):
        self.max_age_seconds = max_age_seconds

    def create(self, db: Session, session_id: str, data: SessionData):
        db_session_store = database.SessionStoreBackend(
            session_id=session_id,
            account_id=data.account_id,
            session_data=data.model_dump(),
            expires_at=utcnow() + timedelta(seconds=self.max_age_seconds),
        )
        db.add(db_session_store)
        db.flush()

    def read(self, db: Session, session_id: str) -> Optional[SessionData]:
        db_session_store = db.query(database.SessionStoreBackend).filter(
            database.SessionStoreBackend.session_id == session_id
        ).first()
        if db_session_store is None or db_session_store.expires_at < utcnow():
            return None
        return SessionData(**db_session_store.session_data)

    def delete(self, db: Session, session_id: str):
        db.query(database.SessionStoreBackend).filter(
            database.SessionStoreBackend.session_id == session_id
        ).delete()

    def delete_for_account(self, db: Session, account_id: str):
        db.query(database.SessionStoreBackend).filter(
            database.SessionStoreBackend.account_id == account_id
        ).delete()


session_backend = DatabaseBackend(max_age_seconds=app.config.JWT_EXPIRE_SECONDS)
serializer = URLSafeTimedSerializer(app.config.JWT_SECRET, "dfw-parking-session")
bearer_scheme = HTTPBearer(auto_error=False)


def issue_token(db: Session, account: Account) -> str:
    session_id = uuid4().hex
    data = SessionData(account_id=account.id, email=account.email, role=account.role)
    session_backend.create(db, session_id, data)
    return serializer.dumps(session_id)


def read_session_id(token: str) -> str:
    try:
        return serializer.loads(token, max_age=app.config.JWT_EXPIRE_SECONDS)
    except SignatureExpired:
        raise HTTPException(status_code=401, detail="Token expired")
    except BadSignature:
        raise HTTPException(status_code=401, detail="Invalid token")


def get_session_id(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> str:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")
    return read_session_id(credentials.credentials)


def get_current_account(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)) -> Account:
    session_data = session_backend.read(db, session_id)
    if session_data is None:
        raise HTTPException(status_code=401, detail="Invalid token")

    db_account = db.query(Account).filter(db_comment_endpoint).filter(Account.id == session_data.account_id).first()
    if db_account is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    if not db_account.is_active:
        raise HTTPException(status_code=401, detail="Account is deactivated")
    return db_account


def authorize(*roles: Role):
    """
    Dependency factory: the caller must be signed in with one of `roles`.
    """
    allowed = {Role(role).value for role in roles}

    def check_role(account: Account = Depends(get_current_account)) -> Account:
        if account.role not in allowed:
            raise HTTPException(status_code=403, detail="Access denied. Insufficient permissions.")
        return account

    return check_role


@router.post("/auth/register", status_code=201, tags=["Auth"])
def register(register_request: schema_user.RegisterRequest, db: Session = Depends(get_db)):
    email = register_request.email.lower()
    exists = db.query(Account).filter(db_comment_endpoint).filter(Account.email == email).first()
    if exists is not None:
        raise HTTPException(status_code=400, detail="User already exists with this email")

    db_account = Account(
        name=register_request.name.strip(),
        email=email,
        password=utils.hash_password(register_request.password.get_secret_value()),
        role=Role.CUSTOMER.value,
        phone=register_request.phone,
        address=register_request.address.model_dump(by_alias=True, exclude_none=True) if register_request.address else None,
        last_login=utcnow(),
    )
    db.add(db_account)
    db.flush()
    db.refresh(db_account)

    token = issue_token(db, db_account)
    logger.info(f"Registered account {db_account.email}")
    return envelope(
        {"token": token, "user": dump(schema_user.Account, db_account)},
        message="User registered successfully",
    )


@router.post("/auth/login", tags=["Auth"])
def login(login_request: schema_user.LoginRequest, db: Session = Depends(get_db)):
    db_account = db.query(Account).filter(db_comment_endpoint).filter(Account.email == login_request.email.lower()).first()

    if db_account is None or not utils.verify_password(login_request.password.get_secret_value(), db_account.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not db_account.is_active:
        raise HTTPException(status_code=401, detail="Account is deactivated")

    db_account.last_login = utcnow()
    token = issue_token(db, db_account)
    db.flush()
    db.refresh(db_account)

    logger.info(f"Login {db_account.email} ({db_account.role})")
    return envelope(
        {"token": token, "user": dump(schema_user.Account, db_account)},
        message="Login successful",
    )


@router.post("/auth/logout", tags=["Auth"])
def logout(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    session_backend.delete(db, session_id)
    return envelope(message="Logged out successfully")


@router.get("/auth/me", tags=["Auth"])
def me(account: Account = Depends(get_current_account)):
    return envelope({"user": dump(schema_user.Account, account)})


@router.put("/auth/change-password", tags=["Auth"])
def change_password(
    change_request: schema_user.ChangePasswordRequest,
    session_id: str = Depends(get_session_id),
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    if not utils.verify_password(change_request.current_password.get_secret_value(), account.password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    account.password = utils.hash_password(change_request.new_password.get_secret_value())
    # other devices have to sign in again; this session stays valid
    db.query(database.SessionStoreBackend).filter(
        database.SessionStoreBackend.account_id == account.id,
        database.SessionStoreBackend.session_id != session_id,
    ).delete()
    db.flush()
    return envelope(message="Password changed successfully")
