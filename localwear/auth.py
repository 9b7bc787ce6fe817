# localwear/auth.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from jose import JWTError, jwt
from passlib.context import CryptContext


pwd = CryptContext(schemes=["argon2"], deprecated="auto")


@dataclass(frozen=True)
class Principal:
    user_id: int
    email: str
    role: str


def _jwt_secret() -> str:
    return os.getenv("JWT_SECRET", "dev-secret-change-me")


def _jwt_alg() -> str:
    return os.getenv("JWT_ALG", "HS256")


def _jwt_expire_minutes() -> int:
    # default 24h
    raw = os.getenv("JWT_EXPIRE_MIN", "1440")
    try:
        return int(raw)
    except ValueError:
        return 1440


def google_client_id() -> str:
    return os.getenv("GOOGLE_CLIENT_ID", "").strip()


def hash_password(p: str) -> str:
    return pwd.hash(p)


def verify_password(p: str, h: str) -> bool:
    return pwd.verify(p, h)


def create_token(user_id: int, email: str, role: str) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=_jwt_expire_minutes())
    payload = {"sub": email, "uid": user_id, "role": role, "exp": exp}
    return jwt.encode(payload, _jwt_secret(), algorithm=_jwt_alg())


def decode_token(token: str) -> Optional[Principal]:
    try:
        data = jwt.decode(token, _jwt_secret(), algorithms=[_jwt_alg()])
    except JWTError:
        return None

    email = data.get("sub")
    uid = data.get("uid")
    role = data.get("role")
    if not email or uid is None or not role:
        return None
    return Principal(user_id=int(uid), email=str(email), role=str(role))


def verify_google_id_token(token: str) -> Dict[str, Any]:
    """Check signature, expiry and audience of a Google ID token.

    Returns the token claims; raises ValueError when the token is rejected.
    """
    client_id = google_client_id()
    if not client_id:
        raise ValueError("GOOGLE_CLIENT_ID is not configured")
    return id_token.verify_oauth2_token(token, google_requests.Request(), client_id)
