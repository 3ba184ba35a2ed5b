from __future__ import annotations

import logging
import re
import time
from typing import Any

import bcrypt

from ..errors import RegistrationError

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "username": record["username"],
        "email": record["email"],
        "full_name": record["full_name"],
        "role": record["role"],
    }


def _add_user(username: str, email: str, password: str, full_name: str, role: str) -> dict[str, Any]:
    record = {
        "id": len(_users) + 1,
        "username": username,
        "email": email,
        "full_name": full_name,
        "role": role,
        "password_hash": _hash_password(password),
        "created_at": time.time(),
        "last_login": None,
    }
    _users[username.lower()] = record
    return record


def _seed_users() -> None:
    """Pre-seed demo users on import."""
    _add_user("user", "user@example.com", "user123", "Demo User", "user")
    _add_user("admin", "admin@example.com", "admin123", "Admin", "admin")


def register_user(
    username: str,
    email: str,
    password: str,
    full_name: str = "",
) -> dict[str, Any]:
    """Create a regular user. Raises ``RegistrationError`` on bad or duplicate input."""
    username = username.strip()
    email = email.strip()
    if len(username) < MIN_USERNAME_LENGTH:
        raise RegistrationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    if not _EMAIL_RE.match(email):
        raise RegistrationError("Please enter a valid email address")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise RegistrationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    email_lower = email.lower()
    if username.lower() in _users or any(u["email"].lower() == email_lower for u in _users.values()):
        raise RegistrationError("Username or email already exists")

    record = _add_user(username, email, password, full_name.strip(), "user")
    logger.info("Registered user %s (id=%s)", username, record["id"])
    return _public(record)


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the public user dict or ``None``."""
    record = _users.get(username.strip().lower())
    if record and _verify_password(password, record["password_hash"]):
        record["last_login"] = time.time()
        return _public(record)
    return None


def get_user(username: str) -> dict[str, Any] | None:
    record = _users.get(username.lower())
    return dict(record) if record else None


_seed_users()
