from __future__ import annotations

import pytest

from coursebook.core.enums import Role
from coursebook.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from coursebook.users.model import User
from coursebook.users.service import Actor, UserService


@pytest.fixture
def service(users_repo, courses_repo):
    return UserService(users_repo, courses_repo)


def test_resolve_actor_from_api_key(service, admin):
    actor = service.resolve_actor("admin-key")
    assert actor == Actor(user_id=admin.user_id, client_id=1, is_admin=True, is_instructor=False)


@pytest.mark.parametrize("key", [None, "", "nope"])
def test_resolve_actor_rejects_bad_keys(service, key):
    with pytest.raises(AuthenticationError):
        service.resolve_actor(key)


def test_list_users_is_client_scoped_and_sorted(service, users_repo, admin_actor):
    users_repo.create_user(client_id=2, idn=1, username="elsewhere", fields={"last_name": "Aardvark"})
    names = [u.last_name for u in service.list_users(admin_actor)]
    assert names == ["Admin", "Student"]


def test_show_user_includes_courses(service, admin_actor, student, course):
    detail = service.show_user(admin_actor, student.user_id)
    assert detail.user == student
    assert detail.courses == (course,)
    assert detail.to_dict()["courses"][0]["name"] == "Intro to Python"


def test_show_user_from_other_client(service, student):
    with pytest.raises(NotFoundError):
        service.show_user(Actor(user_id=99, client_id=2, is_admin=True), student.user_id)


def test_create_user_assigns_next_idn(service, admin_actor):
    user = service.create_user(admin_actor, {
        "username": "New.Person",
        "first_name": "New",
        "last_name": "Person",
        "is_instructor": 1,
        "api_key": "smuggled",
    })

    assert user.username == "new.person"
    assert user.idn == 12
    assert user.is_instructor is True
    assert user.api_key is None


def test_create_user_rejects_duplicate_username(service, admin_actor):
    with pytest.raises(ValidationError):
        service.create_user(admin_actor, {"username": "SAM", "first_name": "S", "last_name": "Two"})


def test_create_user_requires_staff(service, student_actor):
    with pytest.raises(AuthorizationError):
        service.create_user(student_actor, {"username": "x"})


def test_student_updates_own_profile_only(service, student_actor, student):
    detail = service.update_user(student_actor, student.user_id, {
        "phone": "555-0100",
        "is_admin": True,
        "credits": 1000,
        "generate_api_key": True,
    })

    assert detail.user.phone == "555-0100"
    assert detail.user.is_admin is False
    assert detail.user.credits is None
    assert detail.user.api_key == "student-key"
    assert detail.user.first_name == "Sam"


def test_student_cannot_edit_others(service, student_actor, admin):
    with pytest.raises(AuthorizationError):
        service.update_user(student_actor, admin.user_id, {"phone": "1"})


def test_admin_updates_roles_and_api_key(service, admin_actor, student):
    detail = service.update_user(admin_actor, student.user_id, {
        "is_instructor": True,
        "price": 250,
        "generate_api_key": True,
        "username": "Samuel",
    })

    assert detail.user.roles() == [Role.INSTRUCTOR, Role.STUDENT]
    assert detail.user.price == 250
    assert detail.user.api_key not in (None, "student-key")
    assert detail.user.username == "samuel"


def test_update_username_collision(service, admin_actor, student):
    with pytest.raises(ValidationError):
        service.update_user(admin_actor, student.user_id, {"username": "ADMIN@school.test"})


def test_remove_user(service, users_repo, admin_actor, student):
    service.remove_user(admin_actor, student.user_id)
    assert users_repo.get_by_id(student.user_id, client_id=1) is None

    with pytest.raises(NotFoundError):
        service.remove_user(admin_actor, student.user_id)


def test_remove_user_requires_admin(service, student_actor, admin):
    with pytest.raises(AuthorizationError):
        service.remove_user(student_actor, admin.user_id)


def test_import_requires_list_payload(service, admin_actor):
    with pytest.raises(ValidationError):
        service.import_users(admin_actor, {"username": "a"})


def test_profile_helpers():
    user = User(user_id=1, client_id=1, idn=1, username="jo", first_name="Jo", last_name="Smith", github="jo")
    assert user.full_name == "Smith, Jo"
    assert user.display_name == "Jo Smith"
    # 4 of 9 profile fields
    assert user.profile_completeness() == 44
