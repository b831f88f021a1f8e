# tests/test_user_repository.py

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.orm import Session

from user_service.models.task import Task
from user_service.models.user import User
from user_service.repositories.user_repository import UserRepository


def test_create_assigns_id(repository: UserRepository) -> None:
    first = repository.create(name="Ana", email="ana@example.com")
    second = repository.create(name="Bruno", email="bruno@example.com")

    assert first.id is not None
    assert second.id is not None
    assert first.id != second.id
    assert (second.name, second.email) == ("Bruno", "bruno@example.com")


def test_duplicate_email_propagates_and_session_recovers(repository: UserRepository) -> None:
    repository.create(name="Ana", email="ana@example.com")

    with pytest.raises(IntegrityError):
        repository.create(name="Other Ana", email="ana@example.com")

    # rolled back, so the session keeps working
    repository.create(name="Carla", email="carla@example.com")
    assert [u.email for u in repository.find_all()] == ["ana@example.com", "carla@example.com"]


def test_find_by_id_and_find_all(repository: UserRepository) -> None:
    assert repository.find_all() == []
    assert repository.find_by_id(1) is None

    user = repository.create(name="Ana", email="ana@example.com")

    assert repository.find_by_id(user.id).email == "ana@example.com"
    assert repository.find_by_id(user.id + 100) is None


def test_update_applies_only_given_fields(repository: UserRepository) -> None:
    user = repository.create(name="Ana", email="ana@example.com")

    updated = repository.update(user.id, {"name": "Ana Maria"})

    assert updated.name == "Ana Maria"
    assert updated.email == "ana@example.com"


def test_update_missing_row_fails(repository: UserRepository) -> None:
    with pytest.raises(NoResultFound):
        repository.update(42, {"name": "Ghost"})


def test_update_to_taken_email_fails(repository: UserRepository) -> None:
    repository.create(name="Ana", email="ana@example.com")
    bruno = repository.create(name="Bruno", email="bruno@example.com")

    with pytest.raises(IntegrityError):
        repository.update(bruno.id, {"email": "ana@example.com"})

    assert repository.find_by_id(bruno.id).email == "bruno@example.com"


def test_delete(repository: UserRepository) -> None:
    user = repository.create(name="Ana", email="ana@example.com")
    user_id = user.id

    removed = repository.delete(user_id)

    assert removed is user
    assert (removed.id, removed.name, removed.email) == (user_id, "Ana", "ana@example.com")
    assert repository.find_by_id(user_id) is None
    with pytest.raises(NoResultFound):
        repository.delete(user_id)


def test_task_schema_and_owner_reference(db: Session, repository: UserRepository) -> None:
    owner = repository.create(name="Ana", email="ana@example.com")
    task = Task(title="Write report", user_id=owner.id)
    orphan = Task(title="Unassigned")
    db.add_all([task, orphan])
    db.commit()

    assert task.completed is False
    assert orphan.user_id is None
    assert [t.title for t in db.get(User, owner.id).tasks] == ["Write report"]

    repository.delete(owner.id)

    # ON DELETE SET NULL is applied by the store
    assert db.get(Task, task.id).user_id is None
