"""Users blueprint (CRUD and search)."""
from __future__ import annotations

from dataclasses import asdict
from typing import Iterable

from flask import Blueprint, request
from sqlalchemy.orm import Session

from ...db.repositories.user_repo import UserRepository
from ...db.session import db
from ...domain.errors import NotFoundError, ValidationError
from ...domain.user import User
from ...errors import ok
from ...services.user_service import UserService
from .schemas import UserCreateIn, UserOut, UserUpdateIn


bp = Blueprint("users", __name__)

RECENT_LIMIT_MAX = 100


def _service() -> UserService:
    assert db.Session is not None, "DB session is not initialized"
    session: Session = db.Session()
    return UserService(UserRepository(session))


def _out(user: User) -> dict:
    return UserOut.model_validate(asdict(user)).model_dump(mode="json", by_alias=True)


def _out_list(users: Iterable[User]) -> list[dict]:
    return [_out(u) for u in users]


@bp.get("/")
def list_users():
    return ok(_out_list(_service().list_users()))


@bp.get("/search")
def search_users():
    svc = _service()
    users = svc.search_users(request.args.get("name"), request.args.get("email"))
    return ok(_out_list(users))


@bp.get("/count")
def count_users():
    return ok(_service().count_users())


@bp.get("/recent")
def recent_users():
    raw = request.args.get("limit", "10")
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError(f"limit must be an integer, got {raw!r}") from None
    if not 1 <= limit <= RECENT_LIMIT_MAX:
        raise ValidationError(f"limit must be between 1 and {RECENT_LIMIT_MAX}")
    return ok(_out_list(_service().recent_users(limit)))


@bp.get("/<int:user_id>")
def get_user(user_id: int):
    user = _service().get_user(user_id)
    if not user:
        raise NotFoundError(user_id)
    return ok(_out(user))


@bp.post("/")
def create_user():
    payload = UserCreateIn.model_validate_json(request.get_data())
    user = _service().create_user(name=payload.name, email=payload.email, phone=payload.phone)
    return ok(_out(user), 201)


@bp.put("/<int:user_id>")
def update_user(user_id: int):
    payload = UserUpdateIn.model_validate_json(request.get_data())
    user = _service().update_user(user_id, name=payload.name, email=payload.email, phone=payload.phone)
    return ok(_out(user))


@bp.delete("/<int:user_id>")
def delete_user(user_id: int):
    if not _service().delete_user(user_id):
        raise NotFoundError(user_id)
    return ok({"message": "User deleted successfully", "id": user_id})
