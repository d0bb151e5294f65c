"""User service encapsulating business rules."""
from __future__ import annotations

from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError

from ..db.repositories.user_repo import UserRepository
from ..domain.errors import DuplicateEmailError, NotFoundError, ValidationError
from ..domain.user import User


class UserService:
    """Create/update enforce "email unique" and "id exists".

    The existence check and the write share one transaction. A concurrent
    writer that slips past the check still trips the unique constraint, which
    is reported as the same :class:`DuplicateEmailError`.
    """

    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    def list_users(self) -> List[User]:
        return self.repo.list()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.repo.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.repo.get_by_email(email)

    def create_user(self, name: str, email: str, phone: str | None = None) -> User:
        try:
            with self.repo.transaction():
                if self.repo.exists_by_email(email):
                    raise DuplicateEmailError(email)
                user = self.repo.insert(name=name, email=email, phone=phone)
        except IntegrityError as exc:
            raise self._constraint_error(exc, email) from exc
        except DuplicateEmailError:
            logger.warning("Rejected create: email {} already in use", email)
            raise
        logger.info("Created user {} <{}>", user.id, user.email)
        return user

    def update_user(self, user_id: int, name: str, email: str, phone: str | None = None) -> User:
        try:
            with self.repo.transaction():
                existing = self.repo.get(user_id)
                if existing is None:
                    raise NotFoundError(user_id)
                if existing.email != email and self.repo.exists_by_email(email, exclude_id=user_id):
                    raise DuplicateEmailError(email)
                user = self.repo.update(user_id, name=name, email=email, phone=phone)
                if user is None:
                    raise NotFoundError(user_id)
        except IntegrityError as exc:
            raise self._constraint_error(exc, email, exclude_id=user_id) from exc
        except (NotFoundError, DuplicateEmailError) as exc:
            logger.warning("Rejected update of user {}: {}", user_id, exc)
            raise
        logger.info("Updated user {}", user_id)
        return user

    def delete_user(self, user_id: int) -> bool:
        with self.repo.transaction():
            deleted = self.repo.delete(user_id)
        if deleted:
            logger.info("Deleted user {}", user_id)
        return deleted

    def search_users(self, name: str | None, email: str | None = None) -> List[User]:
        name = (name or "").strip() or None
        email = (email or "").strip() or None
        if name is None and email is None:
            return self.repo.list()
        if email is None:
            return self.repo.find_by_name(name)
        return self.repo.find_by_name_and_email(name, email)

    def count_users(self) -> int:
        return self.repo.count()

    def recent_users(self, limit: int = 10) -> List[User]:
        if limit < 1:
            raise ValidationError("limit must be a positive integer")
        return self.repo.find_recent(limit)

    def _constraint_error(
        self, exc: IntegrityError, email: str, exclude_id: int | None = None
    ) -> Exception:
        # The failed transaction is already rolled back; this read starts a fresh one.
        if self.repo.exists_by_email(email, exclude_id=exclude_id):
            logger.warning("Unique constraint rejected email {}", email)
            return DuplicateEmailError(email)
        logger.warning("Constraint violation on users: {}", exc.orig)
        return ValidationError("User data violates a database constraint")
