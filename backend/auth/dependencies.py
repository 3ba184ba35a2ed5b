from __future__ import annotations

from fastapi import Depends, HTTPException, Request


def get_current_user(request: Request) -> dict | None:
    """Return the user dict from the session, or ``None``."""
    user = request.session.get("user")
    if not user or "id" not in user:
        return None
    return user


def require_user(request: Request) -> dict:
    """Raise 401 unless a user with an id is logged in."""
    user = get_current_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not admin."""
    user = require_user(request)
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def require_user_id(user: dict = Depends(require_user)) -> int:
    """Owner id for per-user recipe access."""
    try:
        return int(user["id"])
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=401, detail="Not authenticated") from exc
