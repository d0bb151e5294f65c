"""Repository for user data access (CRUD and search queries)."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..models.user import UserModel
from ...domain.user import User

# Ids are stored in a signed 64-bit column; anything outside cannot exist.
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def _storable(user_id: int) -> bool:
    return _ID_MIN <= user_id <= _ID_MAX


def _to_dc(m: UserModel) -> User:
    return User(
        id=m.id,
        name=m.name,
        email=m.email,
        phone=m.phone,
        created_at=m.created_at,
    )


class UserRepository:
    """Single-table queries over ``users``.

    Writes are flushed, never committed; callers scope them with
    :meth:`transaction`.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[None]:
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def list(self) -> List[User]:
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.id)
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def get(self, user_id: int) -> Optional[User]:
        if not _storable(user_id):
            return None
        m = self.session.get(UserModel, user_id)
        return _to_dc(m) if m else None

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email).limit(1)
        m = self.session.scalars(stmt).first()
        return _to_dc(m) if m else None

    def find_by_name(self, term: str) -> List[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.name.icontains(term, autoescape=True))
            .order_by(UserModel.created_at, UserModel.id)
        )
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def find_by_phone(self, phone: str) -> List[User]:
        stmt = select(UserModel).where(UserModel.phone == phone).order_by(UserModel.id)
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def find_created_after(self, moment: datetime) -> List[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.created_at > moment)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
        )
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def find_recent(self, limit: int) -> List[User]:
        stmt = (
            select(UserModel)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .limit(limit)
        )
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def find_by_name_and_email(self, name: str | None, email: str | None) -> List[User]:
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.id)
        if name is not None:
            stmt = stmt.where(UserModel.name.icontains(name, autoescape=True))
        if email is not None:
            stmt = stmt.where(UserModel.email.icontains(email, autoescape=True))
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def exists_by_email(self, email: str, exclude_id: int | None = None) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == email)
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        return self.session.scalars(stmt.limit(1)).first() is not None

    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(UserModel)) or 0

    def insert(self, *, name: str, email: str, phone: str | None = None) -> User:
        m = UserModel(name=name, email=email, phone=phone)
        self.session.add(m)
        self.session.flush()
        self.session.refresh(m)
        return _to_dc(m)

    def update(self, user_id: int, *, name: str, email: str, phone: str | None) -> Optional[User]:
        if not _storable(user_id):
            return None
        m = self.session.get(UserModel, user_id)
        if not m:
            return None
        m.name = name
        m.email = email
        m.phone = phone
        self.session.flush()
        self.session.refresh(m)
        return _to_dc(m)

    def delete(self, user_id: int) -> bool:
        if not _storable(user_id):
            return False
        result = self.session.execute(delete(UserModel).where(UserModel.id == user_id))
        return result.rowcount > 0
