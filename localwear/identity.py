# localwear/identity.py
from __future__ import annotations

import logging
from typing import Tuple

from google.auth.exceptions import GoogleAuthError
from sqlalchemy.orm import Session

from .auth import create_token, verify_google_id_token, verify_password
from .errors import BadRequestError
from .models import Role, User
from .repositories import UserRepository

log = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    return create_token(user.id, user.email, user.role)


def google_login(db: Session, raw_token: str) -> Tuple[str, User]:
    """Sign in with a Google ID token, creating a CUSTOMER account on first visit."""
    try:
        claims = verify_google_id_token(raw_token)
    except (ValueError, GoogleAuthError) as e:
        log.warning("google token rejected: %s", e)
        raise BadRequestError(f"Google authentication failed: {e}") from e

    google_id = str(claims.get("sub") or "")
    email = str(claims.get("email") or "")
    if not google_id or not email:
        raise BadRequestError("Google authentication failed: token has no subject or email")
    name = str(claims.get("name") or email.split("@")[0])

    users = UserRepository(db)
    user = users.get_by_google_id(google_id)
    if user is None:
        user = users.get_by_email(email)
        if user is not None:
            # admin accounts sign in with a password only
            if user.role == Role.ADMIN.value or not claims.get("email_verified"):
                log.warning("google sign-in refused to link existing account %s", email)
                raise BadRequestError("Google authentication failed: account cannot be linked")
            user.google_id = google_id
            users.save(user)
            log.info("linked google id to existing account %s", email)
        else:
            user = users.save(
                User(name=name, email=email, google_id=google_id, role=Role.CUSTOMER.value)
            )
            log.info("created customer account %s from google sign-in", email)
        db.commit()

    return issue_token(user), user


def admin_login(db: Session, email: str, password: str) -> Tuple[str, User]:
    user = UserRepository(db).get_by_email(email)
    if user is None or user.role != Role.ADMIN.value or not user.password_hash:
        log.warning("admin login refused for %s", email)
        raise BadRequestError("Invalid credentials")

    if not verify_password(password, user.password_hash):
        log.warning("admin login bad password for %s", email)
        raise BadRequestError("Invalid credentials")

    return issue_token(user), user
