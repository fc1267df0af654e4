from __future__ import annotations

from datetime import date
from typing import Optional

from flask import request

from ..core.exceptions import AuthenticationError, ValidationError
from ..users.directory import HierarchyDirectory
from ..users.model import Principal
from .datetime_utils import parse_iso_date

USER_HEADER = "X-User-Id"


def current_principal(directory: HierarchyDirectory) -> Principal:
    """Resolve the already-authenticated acting user from the request header."""
    user_id = (request.headers.get(USER_HEADER) or "").strip()
    if not user_id:
        raise AuthenticationError("Authentication required")
    user = directory.find_user(user_id)
    if not user:
        raise AuthenticationError("Authentication required")
    return user


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def date_arg(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be in YYYY-MM-DD format")


def int_arg(name: str, default: int = 0, *, limit: Optional[int] = None) -> int:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")
    if limit is not None and abs(number) > limit:
        raise ValidationError(f"{name} must be between -{limit} and {limit}")
    return number
