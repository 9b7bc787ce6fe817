# localwear/access.py
from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, HTTPException

from .auth import Principal, decode_token
from .errors import ForbiddenError
from .models import Role


def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")

    token = authorization.split(" ", 1)[1].strip()
    principal = decode_token(token)
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return principal


def require_roles(*roles: Role) -> Callable[..., Principal]:
    """Dependency that lets the request through only for the given roles."""
    allowed = {Role(r).value for r in roles}

    def guard(principal: Principal = Depends(current_principal)) -> Principal:
        if principal.role not in allowed:
            raise ForbiddenError("Access denied")
        return principal

    return guard


require_admin = require_roles(Role.ADMIN)
require_customer_or_admin = require_roles(Role.CUSTOMER, Role.ADMIN)
