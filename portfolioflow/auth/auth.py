import os
import time
import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple
from dotenv import load_dotenv
from fastapi import HTTPException, Request
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from portfolioflow.db.dbmodels import AdminUser

load_dotenv()

SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
COOKIE_NAME = "access_token"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str):
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str):
    return pwd_context.verify(plain_password, hashed_password)


def get_user_by_username(db: Session, username: str):
    return db.query(AdminUser).filter(AdminUser.username == username).first()


def authenticate_user(db: Session, username: str, password: str):
    user = get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.password):
        return None
    return user


def register_user(db: Session, username: str, password: str):
    if get_user_by_username(db, username):
        return None
    user = AdminUser(username=username, password=get_password_hash(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_admin_from_env(db: Session):
    """Create the ADMIN_USERNAME / ADMIN_PASSWORD account if it's configured and missing."""
    admin_username = os.getenv("ADMIN_USERNAME")
    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_username or not admin_password:
        return None
    user = register_user(db, admin_username, admin_password)
    if user:
        print(f"🔐 Created admin account '{admin_username}' from environment")
    return user


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: Optional[str]) -> Optional[dict]:
    if not token:
        return None
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload if payload.get("sub") else None


def create_guest_token() -> Tuple[str, str]:
    """Mint a guest identity; returns (username, token)."""
    guest_id = str(uuid.uuid4())[:8]
    guest_username = f"guest_{guest_id}_{int(time.time())}"
    token = create_access_token(data={"sub": guest_username, "is_guest": True})
    return guest_username, token


def current_admin(request: Request) -> Optional[str]:
    """Admin username from the cookie or a Bearer header, else None."""
    token = request.cookies.get(COOKIE_NAME)
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header[7:]
    payload = decode_access_token(token)
    if not payload or not payload.get("is_admin"):
        return None
    return payload["sub"]


def require_admin(request: Request) -> str:
    admin = current_admin(request)
    if admin is None:
        raise HTTPException(status_code=401, detail="Admin login required")
    return admin


def resolve_visitor(request: Request) -> Tuple[str, Optional[str]]:
    """Who is visiting: (username, fresh guest token or None if the cookie is valid)."""
    payload = decode_access_token(request.cookies.get(COOKIE_NAME))
    if payload:
        return payload["sub"], None
    # Missing or invalid token: hand out a new guest identity
    return create_guest_token()


def set_token_cookie(response, token: str, max_age: int = ACCESS_TOKEN_EXPIRE_MINUTES * 60):
    response.set_cookie(key=COOKIE_NAME, value=token,
                        httponly=False, max_age=max_age)
