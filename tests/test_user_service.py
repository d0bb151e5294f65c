from __future__ import annotations

import pytest

from user_api.db.repositories.user_repo import UserRepository
from user_api.domain.errors import DuplicateEmailError, NotFoundError, ValidationError
from user_api.services.user_service import UserService


def test_create_with_novel_email_returns_fresh_positive_id(service: UserService) -> None:
    ann = service.create_user("Ann Lee", "ann@x.com")
    bo = service.create_user("Bo", "bo@x.com", "555-0100")

    assert ann.id > 0 and bo.id > 0
    assert ann.id != bo.id


@pytest.mark.parametrize("name, phone", [("Bo", None), ("Ann Lee", "555-0100"), ("Someone Else", "")])
def test_create_with_used_email_is_rejected(service: UserService, name: str, phone: str | None) -> None:
    service.create_user("Ann Lee", "ann@x.com")

    with pytest.raises(DuplicateEmailError):
        service.create_user(name, "ann@x.com", phone)

    assert service.count_users() == 1


def test_get_after_create_returns_created_record(service: UserService) -> None:
    created = service.create_user("Ann Lee", "ann@x.com", "555-0100")

    fetched = service.get_user(created.id)

    assert fetched == created
    assert service.get_user_by_email("ann@x.com") == created


def test_update_phone_only_keeps_other_fields(service: UserService) -> None:
    ann = service.create_user("Ann Lee", "ann@x.com", "555-0100")

    updated = service.update_user(ann.id, "Ann Lee", "ann@x.com", "555-0199")

    assert updated.phone == "555-0199"
    assert (updated.id, updated.name, updated.email, updated.created_at) == (
        ann.id, ann.name, ann.email, ann.created_at,
    )


def test_update_unknown_id_raises_not_found(service: UserService) -> None:
    with pytest.raises(NotFoundError):
        service.update_user(42, "Ghost", "ghost@x.com")


def test_update_to_email_of_another_record_is_rejected(service: UserService) -> None:
    service.create_user("Ann", "ann@x.com")
    bo = service.create_user("Bo", "bo@x.com")

    with pytest.raises(DuplicateEmailError):
        service.update_user(bo.id, "Bo", "ann@x.com")

    assert service.get_user(bo.id).email == "bo@x.com"


def test_update_keeping_own_email_is_allowed(service: UserService) -> None:
    ann = service.create_user("Ann", "ann@x.com")

    assert service.update_user(ann.id, "Ann Lee", "ann@x.com").name == "Ann Lee"


def test_delete_existing_then_missing(service: UserService) -> None:
    ann = service.create_user("Ann", "ann@x.com")

    assert service.delete_user(ann.id) is True
    assert service.get_user(ann.id) is None
    assert service.delete_user(ann.id) is False


def test_search_blank_matches_list_all(service: UserService) -> None:
    service.create_user("John Smith", "john@x.com")
    service.create_user("Ann", "ann@x.com")

    everyone = service.list_users()

    assert service.search_users("") == everyone
    assert service.search_users("   ") == everyone
    assert service.search_users(None) == everyone


def test_search_matches_name_case_insensitively(service: UserService) -> None:
    service.create_user("John Smith", "john@x.com")
    service.create_user("Mary JOHNSON", "mary@x.com")
    service.create_user("Ann", "ann@x.com")

    names = sorted(u.name for u in service.search_users("john"))

    assert names == ["John Smith", "Mary JOHNSON"]


def test_search_with_email_narrows_results(service: UserService) -> None:
    service.create_user("John Smith", "john@work.com")
    service.create_user("John Doe", "john@home.com")

    assert [u.email for u in service.search_users("john", "work")] == ["john@work.com"]
    assert [u.email for u in service.search_users("", "home")] == ["john@home.com"]


def test_recent_users_rejects_non_positive_limit(service: UserService) -> None:
    with pytest.raises(ValidationError):
        service.recent_users(0)


def test_lost_race_on_unique_constraint_reports_duplicate(
    service: UserService, repo: UserRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    service.create_user("Ann", "ann@x.com")
    real_check = repo.exists_by_email
    calls: list[str] = []

    # The first check runs before the competing insert "committed".
    def stale_check(email: str, exclude_id: int | None = None) -> bool:
        calls.append(email)
        if len(calls) == 1:
            return False
        return real_check(email, exclude_id=exclude_id)

    monkeypatch.setattr(repo, "exists_by_email", stale_check)

    with pytest.raises(DuplicateEmailError):
        service.create_user("Bo", "ann@x.com")

    assert service.count_users() == 1


def test_lost_race_on_update_reports_duplicate(
    service: UserService, repo: UserRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    service.create_user("Ann", "ann@x.com")
    bo = service.create_user("Bo", "bo@x.com")
    real_check = repo.exists_by_email
    calls: list[str] = []

    def stale_check(email: str, exclude_id: int | None = None) -> bool:
        calls.append(email)
        if len(calls) == 1:
            return False
        return real_check(email, exclude_id=exclude_id)

    monkeypatch.setattr(repo, "exists_by_email", stale_check)

    with pytest.raises(DuplicateEmailError):
        service.update_user(bo.id, "Bo", "ann@x.com")

    assert service.get_user(bo.id).email == "bo@x.com"


def test_other_constraint_violations_become_validation_errors(service: UserService) -> None:
    with pytest.raises(ValidationError):
        service.create_user("   ", "blank@x.com")

    assert service.count_users() == 0
